"""
Pydantic schemas for saved events.
"""

from datetime import datetime
from pydantic import BaseModel


class SavedEventResponse(BaseModel):
    event_id: int
    event_title: str
    event_location: str
    event_image: str
    event_categories: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SavedStatus(BaseModel):
    event_id: int
    saved: bool
