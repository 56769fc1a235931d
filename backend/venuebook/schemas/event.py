"""
Pydantic schemas for event catalog requests and responses.
Blank-field checks live in the service so non-HTTP callers get them too.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class EventStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EventCreate(BaseModel):
    title: str = Field(..., max_length=255)
    location: str = Field(..., max_length=255)
    description: str = Field(..., max_length=5000)
    image_url: Optional[str] = Field(None, max_length=1024)
    categories: str = Field("", max_length=255)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    image_url: Optional[str] = Field(None, max_length=1024)
    categories: Optional[str] = Field(None, max_length=255)
    status: Optional[EventStatus] = None


class EventResponse(BaseModel):
    id: int
    title: str
    location: str
    description: str
    image_url: str
    categories: str
    hotel_id: str
    status: EventStatus
    created_at: datetime

    model_config = {"from_attributes": True}
