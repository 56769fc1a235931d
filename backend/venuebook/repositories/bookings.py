"""
Booking ledger persistence.

Status changes are conditional updates: the row only changes if it is still
in the expected state, so two racing reviewers cannot both move a booking
out of pending.
"""

from typing import Optional

from sqlalchemy import select, update, func, or_

from venuebook.db.base import utcnow
from venuebook.models.booking import Booking
from venuebook.repositories.base import Repository, contains
from venuebook.services.interfaces.change_feed import Collection


class BookingRepository(Repository):
    collection = Collection.BOOKINGS

    async def get(self, booking_id: int) -> Optional[Booking]:
        async with self._read() as session:
            return await session.get(Booking, booking_id)

    async def add(self, booking: Booking) -> Booking:
        async with self._write() as session:
            session.add(booking)
            await session.flush()
            await session.refresh(booking)
        return booking

    async def change_status(self, booking_id: int, expected: str, new_status: str) -> bool:
        """Returns False if the booking was no longer in `expected` state."""
        async with self._write() as session:
            result = await session.execute(
                update(Booking)
                .where(Booking.id == booking_id, Booking.status == expected)
                .values(status=new_status, updated_at=utcnow())
            )
        return result.rowcount == 1

    async def list_for_hotel(
        self,
        hotel_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Booking]:
        query = select(Booking).where(Booking.hotel_id == hotel_id)
        if status:
            query = query.where(Booking.status == status)
        if search:
            query = query.where(or_(contains(Booking.full_name, search), contains(Booking.email, search)))
        query = query.order_by(Booking.created_at.desc(), Booking.id.desc())

        async with self._read() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def list_for_consumer(self, consumer_id: str) -> list[Booking]:
        async with self._read() as session:
            result = await session.execute(
                select(Booking)
                .where(Booking.consumer_id == consumer_id)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
            )
            return list(result.scalars().all())

    async def count_for_hotel(self, hotel_id: str, status: Optional[str] = None) -> int:
        query = select(func.count()).select_from(Booking).where(Booking.hotel_id == hotel_id)
        if status:
            query = query.where(Booking.status == status)
        async with self._read() as session:
            result = await session.execute(query)
            return result.scalar_one()
