"""
Event catalog: hotel operators create and maintain their own events,
everyone can browse the active ones.
"""

from typing import Optional

from venuebook.core.errors import AuthorizationError, NotFoundError, ValidationError
from venuebook.core.identity import Capability, Principal, ensure_capability
from venuebook.core.logging import get_logger
from venuebook.core.metrics import record_event_mutation
from venuebook.models.event import Event
from venuebook.repositories import Repositories
from venuebook.schemas.event import EventCreate, EventStatus, EventUpdate
from venuebook.services.interfaces.change_feed import Collection
from venuebook.services.live_service import LiveQuery

logger = get_logger(__name__)

REQUIRED_FIELDS = ("title", "location", "description", "image_url")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


async def create_event(repos: Repositories, principal: Principal, event_data: EventCreate) -> Event:
    """Create an active event owned by the calling hotel operator."""
    ensure_capability(principal, Capability.MANAGE_OWN_EVENTS)

    for field in REQUIRED_FIELDS:
        if _blank(getattr(event_data, field)):
            raise ValidationError(field)

    event = Event(
        title=event_data.title.strip(),
        location=event_data.location.strip(),
        description=event_data.description.strip(),
        image_url=event_data.image_url.strip(),
        categories=(event_data.categories or "").strip(),
        hotel_id=principal.id,
        status=EventStatus.ACTIVE.value,
    )
    event = await repos.events.add(event)

    record_event_mutation("create")
    logger.info("event_created", event_id=event.id, hotel_id=event.hotel_id, title=event.title)
    return event


async def get_event(repos: Repositories, event_id: int) -> Event:
    event = await repos.events.get(event_id)
    if not event:
        raise NotFoundError(f"Event {event_id} not found")
    return event


async def _get_owned_event(repos: Repositories, principal: Principal, event_id: int) -> Event:
    ensure_capability(principal, Capability.MANAGE_OWN_EVENTS)
    event = await get_event(repos, event_id)
    if event.hotel_id != principal.id:
        logger.warning("event_access_denied", event_id=event_id, hotel_id=principal.id)
        raise AuthorizationError("Not permitted: event belongs to another hotel")
    return event


async def update_event(
    repos: Repositories,
    principal: Principal,
    event_id: int,
    changes: EventUpdate,
) -> Event:
    """Partial update; only the fields supplied change."""
    await _get_owned_event(repos, principal, event_id)

    values = changes.model_dump(exclude_unset=True)
    for field, value in list(values.items()):
        if field in REQUIRED_FIELDS:
            if _blank(value):
                raise ValidationError(field)
            values[field] = value.strip()
        elif field == "status":
            if value is None:
                raise ValidationError("status")
            values[field] = EventStatus(value).value
        elif field == "categories":
            values[field] = (value or "").strip()

    if not values:
        return await get_event(repos, event_id)

    event = await repos.events.update_fields(event_id, values)
    if event is None:
        # Deleted between the ownership check and the write
        raise NotFoundError(f"Event {event_id} not found")

    record_event_mutation("update")
    logger.info("event_updated", event_id=event_id, fields=sorted(values))
    return event


async def delete_event(repos: Repositories, principal: Principal, event_id: int) -> None:
    """Remove the event. Existing bookings keep their snapshot."""
    await _get_owned_event(repos, principal, event_id)

    if not await repos.events.delete(event_id):
        raise NotFoundError(f"Event {event_id} not found")

    record_event_mutation("delete")
    logger.info("event_deleted", event_id=event_id, hotel_id=principal.id)


async def list_active_events(repos: Repositories, search: Optional[str] = None) -> list[Event]:
    """Active events, newest first. Open to every caller."""
    search = search.strip() if search else None
    return await repos.events.list_active(search)


def watch_active_events(repos: Repositories, search: Optional[str] = None) -> LiveQuery[Event]:
    return LiveQuery(
        repos.feed,
        [Collection.EVENTS],
        lambda: list_active_events(repos, search),
        name="active_events",
    )


async def list_events_by_hotel(repos: Repositories, principal: Principal) -> list[Event]:
    ensure_capability(principal, Capability.MANAGE_OWN_EVENTS)
    return await repos.events.list_by_hotel(principal.id)


def watch_events_by_hotel(repos: Repositories, principal: Principal) -> LiveQuery[Event]:
    ensure_capability(principal, Capability.MANAGE_OWN_EVENTS)
    return LiveQuery(
        repos.feed,
        [Collection.EVENTS],
        lambda: repos.events.list_by_hotel(principal.id),
        name="hotel_events",
    )
