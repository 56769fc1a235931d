"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .change_feed import ChangeFeed, ChangeSubscription, Collection
from .media import MediaStore

__all__ = ['ChangeFeed', 'ChangeSubscription', 'Collection', 'MediaStore']
