"""
Repositories, one per collection, built once at startup and passed to
services explicitly.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from venuebook.repositories.bookings import BookingRepository
from venuebook.repositories.events import EventRepository
from venuebook.repositories.profiles import ProfileRepository
from venuebook.repositories.saved_events import SavedEventRepository
from venuebook.services.interfaces.change_feed import ChangeFeed


@dataclass(frozen=True)
class Repositories:
    profiles: ProfileRepository
    events: EventRepository
    bookings: BookingRepository
    saved_events: SavedEventRepository
    feed: ChangeFeed

    @classmethod
    def build(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed,
    ) -> "Repositories":
        return cls(
            profiles=ProfileRepository(session_factory, feed),
            events=EventRepository(session_factory, feed),
            bookings=BookingRepository(session_factory, feed),
            saved_events=SavedEventRepository(session_factory, feed),
            feed=feed,
        )


__all__ = [
    "Repositories",
    "ProfileRepository",
    "EventRepository",
    "BookingRepository",
    "SavedEventRepository",
]
