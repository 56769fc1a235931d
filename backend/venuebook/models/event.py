"""
Event owned by a hotel operator.

Key design decisions:
- `categories` is opaque free text, never parsed into tags
- Composite index on (status, created_at) serves the public listing
- Bookings point at events without a foreign key, so deleting an event
  never touches the booking ledger
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index, CheckConstraint

from venuebook.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=False)
    categories = Column(String(255), nullable=False, default="")
    hotel_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="check_event_status"),
        Index("ix_events_status_created", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, hotel={self.hotel_id}, status={self.status})>"
