"""
Consumer bookmark of an event, with a display snapshot.
"""

from sqlalchemy import Column, DateTime, Integer, String, ForeignKey, UniqueConstraint, func

from venuebook.db.base import Base, utcnow


class SavedEvent(Base):
    __tablename__ = "saved_events"

    id = Column(Integer, primary_key=True, index=True)
    consumer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, nullable=False)
    event_title = Column(String(255), nullable=False)
    event_location = Column(String(255), nullable=False)
    event_image = Column(String(1024), nullable=False)
    event_categories = Column(String(255), nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("consumer_id", "event_id", name="uq_saved_event_consumer_event"),
    )

    def __repr__(self) -> str:
        return f"<SavedEvent(consumer={self.consumer_id}, event={self.event_id})>"
