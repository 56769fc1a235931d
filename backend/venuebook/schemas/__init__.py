from venuebook.schemas.user import (
    UserCreate, HotelAccountCreate, UserLogin, ProfileUpdate, UserResponse, Token,
)
from venuebook.schemas.event import EventStatus, EventCreate, EventUpdate, EventResponse
from venuebook.schemas.booking import (
    BookingStatus, EventType, BookingCreate, BookingStatusUpdate, BookingResponse,
)
from venuebook.schemas.saved_event import SavedEventResponse, SavedStatus
from venuebook.schemas.stats import HotelStats
from venuebook.schemas.media import MediaUploadResponse

__all__ = [
    "UserCreate", "HotelAccountCreate", "UserLogin", "ProfileUpdate", "UserResponse", "Token",
    "EventStatus", "EventCreate", "EventUpdate", "EventResponse",
    "BookingStatus", "EventType", "BookingCreate", "BookingStatusUpdate", "BookingResponse",
    "SavedEventResponse", "SavedStatus", "HotelStats", "MediaUploadResponse",
]
