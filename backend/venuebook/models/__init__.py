from venuebook.models.user import UserProfile
from venuebook.models.event import Event
from venuebook.models.booking import Booking
from venuebook.models.saved_event import SavedEvent

__all__ = ["UserProfile", "Event", "Booking", "SavedEvent"]
