"""
Saved-event (bookmark) persistence.
"""

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from venuebook.models.saved_event import SavedEvent
from venuebook.repositories.base import Repository
from venuebook.services.interfaces.change_feed import Collection


class SavedEventRepository(Repository):
    collection = Collection.SAVED_EVENTS

    async def exists(self, consumer_id: str, event_id: int) -> bool:
        async with self._read() as session:
            result = await session.execute(
                select(SavedEvent.id).where(
                    SavedEvent.consumer_id == consumer_id,
                    SavedEvent.event_id == event_id,
                )
            )
            return result.first() is not None

    async def add(self, saved: SavedEvent) -> bool:
        """Insert a membership. Returns False if it already existed."""
        try:
            async with self._write() as session:
                session.add(saved)
        except IntegrityError:
            # uq_saved_event_consumer_event: a concurrent save won
            return False
        return True

    async def remove(self, consumer_id: str, event_id: int) -> bool:
        async with self._write() as session:
            result = await session.execute(
                delete(SavedEvent).where(
                    SavedEvent.consumer_id == consumer_id,
                    SavedEvent.event_id == event_id,
                )
            )
        return result.rowcount > 0

    async def list_for_consumer(self, consumer_id: str) -> list[SavedEvent]:
        async with self._read() as session:
            result = await session.execute(
                select(SavedEvent)
                .where(SavedEvent.consumer_id == consumer_id)
                .order_by(SavedEvent.created_at.desc(), SavedEvent.id.desc())
            )
            return list(result.scalars().all())
