"""
Event catalog persistence.
Listing uses the ix_events_status_created composite index.
"""

from typing import Optional

from sqlalchemy import select, delete, func, or_

from venuebook.models.event import Event
from venuebook.repositories.base import Repository, contains
from venuebook.services.interfaces.change_feed import Collection


class EventRepository(Repository):
    collection = Collection.EVENTS

    async def get(self, event_id: int) -> Optional[Event]:
        async with self._read() as session:
            return await session.get(Event, event_id)

    async def add(self, event: Event) -> Event:
        async with self._write() as session:
            session.add(event)
            await session.flush()
            await session.refresh(event)
        return event

    async def update_fields(self, event_id: int, values: dict) -> Optional[Event]:
        async with self._write() as session:
            event = await session.get(Event, event_id)
            if event is None:
                return None
            for field, value in values.items():
                setattr(event, field, value)
            await session.flush()
            await session.refresh(event)
        return event

    async def delete(self, event_id: int) -> bool:
        async with self._write() as session:
            result = await session.execute(delete(Event).where(Event.id == event_id))
        return result.rowcount == 1

    async def list_active(self, search: Optional[str] = None) -> list[Event]:
        query = select(Event).where(Event.status == "active")
        if search:
            query = query.where(
                or_(
                    contains(Event.title, search),
                    contains(Event.location, search),
                    contains(Event.categories, search),
                )
            )
        query = query.order_by(Event.created_at.desc(), Event.id.desc())

        async with self._read() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def list_by_hotel(self, hotel_id: str) -> list[Event]:
        async with self._read() as session:
            result = await session.execute(
                select(Event)
                .where(Event.hotel_id == hotel_id)
                .order_by(Event.created_at.desc(), Event.id.desc())
            )
            return list(result.scalars().all())

    async def count_by_hotel(self, hotel_id: str) -> int:
        async with self._read() as session:
            result = await session.execute(
                select(func.count()).select_from(Event).where(Event.hotel_id == hotel_id)
            )
            return result.scalar_one()
