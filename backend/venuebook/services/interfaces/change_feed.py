"""
Change feed interface.
Repositories publish the name of a collection after every committed write;
live queries subscribe and re-run when one of their collections changes.
"""

from abc import ABC, abstractmethod
from typing import Iterable


class Collection:
    USERS = "users"
    EVENTS = "events"
    BOOKINGS = "bookings"
    SAVED_EVENTS = "saved_events"


class ChangeSubscription(ABC):
    """A standing interest in one or more collections."""

    @abstractmethod
    async def wait(self) -> str:
        """
        Suspend until a watched collection changes.

        Notifications that piled up while the caller was busy are coalesced
        into this one wake-up.

        Returns:
            Name of the collection that changed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class ChangeFeed(ABC):
    """
    Implementations:
    - InProcessChangeFeed: asyncio fan-out inside one process
    - RedisChangeFeed: Redis pub/sub, for several API processes sharing one database
    """

    @abstractmethod
    async def publish(self, collection: str) -> None:
        pass

    @abstractmethod
    async def subscribe(self, collections: Iterable[str]) -> ChangeSubscription:
        pass

    async def close(self) -> None:
        """Release connections held by the feed."""
        pass
