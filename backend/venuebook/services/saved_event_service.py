"""
Saved events: a per-consumer set of bookmarks, independent of bookings.
Every operation is scoped to the caller's own id.
"""

from venuebook.core.errors import NotFoundError
from venuebook.core.identity import Capability, Principal, ensure_capability
from venuebook.core.logging import get_logger
from venuebook.models.saved_event import SavedEvent
from venuebook.repositories import Repositories

logger = get_logger(__name__)


async def save_event(repos: Repositories, principal: Principal, event_id: int) -> None:
    """Idempotent; saving twice leaves one membership."""
    ensure_capability(principal, Capability.SAVE_EVENTS)

    if await repos.saved_events.exists(principal.id, event_id):
        return

    event = await repos.events.get(event_id)
    if not event:
        raise NotFoundError(f"Event {event_id} not found")

    added = await repos.saved_events.add(
        SavedEvent(
            consumer_id=principal.id,
            event_id=event.id,
            event_title=event.title,
            event_location=event.location,
            event_image=event.image_url,
            event_categories=event.categories or "",
        )
    )
    if added:
        logger.info("event_saved", event_id=event_id, consumer_id=principal.id)


async def remove_saved_event(repos: Repositories, principal: Principal, event_id: int) -> None:
    """Idempotent; removing an absent membership is a no-op."""
    ensure_capability(principal, Capability.SAVE_EVENTS)
    if await repos.saved_events.remove(principal.id, event_id):
        logger.info("event_unsaved", event_id=event_id, consumer_id=principal.id)


async def is_saved(repos: Repositories, principal: Principal, event_id: int) -> bool:
    ensure_capability(principal, Capability.SAVE_EVENTS)
    return await repos.saved_events.exists(principal.id, event_id)


async def list_saved_events(repos: Repositories, principal: Principal) -> list[SavedEvent]:
    ensure_capability(principal, Capability.SAVE_EVENTS)
    return await repos.saved_events.list_for_consumer(principal.id)
