"""
Booking ledger.

LIFECYCLE
=========

  pending --confirm--> confirmed
     \
      ----reject--->  rejected

Consumers create bookings; only the hotel that owns the booked event may
move a booking out of pending, and it can only do so once. Confirmed and
rejected are terminal.

The transition is written as a conditional update
(UPDATE ... WHERE id = :id AND status = 'pending'), so the store itself
refuses a second transition even when two reviewer sessions race. The
loser gets InvalidTransitionError rather than silently overwriting.

Snapshot semantics:
  A booking copies the event's title, location and image at creation.
  Later edits to the event do not touch existing bookings, and deleting
  the event leaves them intact.
"""

from typing import Optional

from venuebook.core.errors import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from venuebook.core.identity import Capability, Principal, ensure_capability
from venuebook.core.logging import get_logger
from venuebook.core.metrics import record_booking_request, record_transition
from venuebook.models.booking import Booking
from venuebook.repositories import Repositories
from venuebook.schemas.booking import BookingCreate, BookingStatus
from venuebook.schemas.event import EventStatus
from venuebook.services.interfaces.change_feed import Collection
from venuebook.services.live_service import LiveQuery

logger = get_logger(__name__)

TERMINAL_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.REJECTED})

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: TERMINAL_STATUSES,
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.REJECTED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


async def create_booking(
    repos: Repositories,
    principal: Optional[Principal],
    booking_data: BookingCreate,
) -> Booking:
    """Record a pending booking request for an event."""
    if principal is None:
        record_booking_request(created=False)
        raise ValidationError("consumer", "Sign in required to book an event")
    ensure_capability(principal, Capability.BOOK_EVENTS)

    for field in ("full_name", "phone", "date"):
        value = getattr(booking_data, field)
        if value is None or not value.strip():
            record_booking_request(created=False)
            raise ValidationError(field)

    event = await repos.events.get(booking_data.event_id)
    if not event:
        record_booking_request(created=False)
        raise NotFoundError(f"Event {booking_data.event_id} not found")

    if event.status != EventStatus.ACTIVE.value:
        record_booking_request(created=False)
        raise ValidationError("event_id", f"Event {event.id} is not accepting bookings")

    email = (booking_data.email or "").strip() or principal.email

    booking = Booking(
        event_id=event.id,
        event_title=event.title,
        event_location=event.location,
        event_image=event.image_url,
        event_date=booking_data.date.strip(),
        full_name=booking_data.full_name.strip(),
        email=email,
        phone=booking_data.phone.strip(),
        event_type=booking_data.event_type.value,
        hotel_id=event.hotel_id,
        consumer_id=principal.id,
        status=BookingStatus.PENDING.value,
    )
    booking = await repos.bookings.add(booking)

    record_booking_request(created=True)
    logger.info(
        "booking_created",
        booking_id=booking.id,
        event_id=event.id,
        hotel_id=booking.hotel_id,
        consumer_id=principal.id,
    )
    return booking


async def transition_status(
    repos: Repositories,
    principal: Principal,
    booking_id: int,
    new_status: BookingStatus,
) -> Booking:
    """
    Confirm or reject a pending booking.

    Raises, in order of checking:
        NotFoundError: unknown booking
        AuthorizationError: booking belongs to another hotel
        InvalidTransitionError: booking already confirmed or rejected
    """
    ensure_capability(principal, Capability.REVIEW_BOOKINGS)
    try:
        new_status = BookingStatus(new_status)
    except ValueError:
        raise ValidationError("status", f"Unknown booking status: {new_status!r}") from None
    if new_status not in TERMINAL_STATUSES:
        raise ValidationError("status", "status must be confirmed or rejected")

    booking = await repos.bookings.get(booking_id)
    if not booking:
        raise NotFoundError(f"Booking {booking_id} not found")

    if booking.hotel_id != principal.id:
        logger.warning("booking_access_denied", booking_id=booking_id, hotel_id=principal.id)
        raise AuthorizationError("Not permitted: booking belongs to another hotel")

    current = BookingStatus(booking.status)
    if not can_transition(current, new_status):
        record_transition(new_status.value, applied=False)
        raise InvalidTransitionError(booking_id, current.value, new_status.value)

    applied = await repos.bookings.change_status(booking_id, current.value, new_status.value)
    refreshed = await repos.bookings.get(booking_id)

    if not applied:
        # Another session moved it first
        record_transition(new_status.value, applied=False)
        latest = refreshed.status if refreshed else "unknown"
        logger.info("booking_transition_lost_race", booking_id=booking_id, current=latest)
        raise InvalidTransitionError(booking_id, latest, new_status.value)

    record_transition(new_status.value, applied=True)
    logger.info(
        "booking_status_changed",
        booking_id=booking_id,
        hotel_id=principal.id,
        from_status=current.value,
        to_status=new_status.value,
    )
    return refreshed


async def list_bookings_for_hotel(
    repos: Repositories,
    principal: Principal,
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
) -> list[Booking]:
    """Bookings for the caller's events, optionally one status only."""
    ensure_capability(principal, Capability.REVIEW_BOOKINGS)
    return await repos.bookings.list_for_hotel(
        principal.id,
        status=BookingStatus(status).value if status else None,
        search=search.strip() if search and search.strip() else None,
    )


def watch_bookings_for_hotel(
    repos: Repositories,
    principal: Principal,
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
) -> LiveQuery[Booking]:
    ensure_capability(principal, Capability.REVIEW_BOOKINGS)
    return LiveQuery(
        repos.feed,
        [Collection.BOOKINGS],
        lambda: list_bookings_for_hotel(repos, principal, status, search),
        name="hotel_bookings",
    )


async def list_bookings_for_consumer(repos: Repositories, principal: Principal) -> list[Booking]:
    ensure_capability(principal, Capability.BOOK_EVENTS)
    return await repos.bookings.list_for_consumer(principal.id)


def watch_bookings_for_consumer(repos: Repositories, principal: Principal) -> LiveQuery[Booking]:
    ensure_capability(principal, Capability.BOOK_EVENTS)
    return LiveQuery(
        repos.feed,
        [Collection.BOOKINGS],
        lambda: repos.bookings.list_for_consumer(principal.id),
        name="consumer_bookings",
    )
