"""
Booking request for an event.

Key design decisions:
- Event title/location/image are a snapshot taken at booking time, not a join
- `hotel_id` is copied from the event so hotel inboxes are a single-column filter
- `consumer_id` links to the profile id rather than the contact email
- Status only ever moves pending -> confirmed or pending -> rejected
"""

from sqlalchemy import Column, Integer, String, ForeignKey, Index, CheckConstraint

from venuebook.db.base import Base, TimestampMixin


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, nullable=False, index=True)

    # Snapshot of the event
    event_title = Column(String(255), nullable=False)
    event_location = Column(String(255), nullable=False)
    event_image = Column(String(1024), nullable=False)
    event_date = Column(String(50), nullable=False)

    # Contact details as entered at checkout
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, default="")
    phone = Column(String(50), nullable=False)
    event_type = Column(String(30), nullable=False)

    hotel_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    consumer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'rejected')", name="check_booking_status"
        ),
        Index("ix_bookings_hotel_status", "hotel_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, event={self.event_id}, hotel={self.hotel_id}, status={self.status})>"
