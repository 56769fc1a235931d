"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class EventType(str, Enum):
    MUSIC = "music"
    SPORTS = "sports"
    FOOD = "food"
    ARTS = "arts"
    BUSINESS = "business"


class BookingCreate(BaseModel):
    event_id: int
    full_name: str = Field(..., max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: str = Field(..., max_length=50)
    date: str = Field(..., max_length=50)
    event_type: EventType


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    id: int
    event_id: int
    event_title: str
    event_location: str
    event_image: str
    event_date: str
    full_name: str
    email: str
    phone: str
    event_type: EventType
    hotel_id: str
    consumer_id: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
