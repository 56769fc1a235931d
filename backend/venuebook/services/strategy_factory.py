"""
Backend factories.
Chooses the change feed and media store implementations from settings.
"""

from venuebook.core.config import get_settings
from venuebook.services.interfaces.change_feed import ChangeFeed
from venuebook.services.interfaces.media import MediaStore
from venuebook.services.change_feed import InProcessChangeFeed, RedisChangeFeed
from venuebook.services.media_service import LocalMediaStore


def build_change_feed() -> ChangeFeed:
    """
    - memory: one API process (development, tests)
    - redis: several API processes behind a load balancer

    Overridden via CHANGE_FEED_BACKEND env var.
    """
    backend = get_settings().CHANGE_FEED_BACKEND

    if backend == "redis":
        return RedisChangeFeed()
    if backend == "memory":
        return InProcessChangeFeed()
    raise ValueError(f"Unknown CHANGE_FEED_BACKEND: {backend}")


def build_media_store() -> MediaStore:
    backend = get_settings().MEDIA_BACKEND

    if backend == "local":
        return LocalMediaStore()
    raise ValueError(f"Unknown MEDIA_BACKEND: {backend}")
