"""
Service-level tests for the booking state machine.
"""

import asyncio

import pytest

from venuebook.core.errors import InvalidTransitionError, ValidationError
from venuebook.schemas.booking import BookingCreate, BookingStatus, EventType
from venuebook.services.booking_service import (
    ALLOWED_TRANSITIONS,
    can_transition,
    create_booking,
    transition_status,
)


def booking_form(event_id: int, **overrides) -> BookingCreate:
    data = {
        "event_id": event_id,
        "full_name": "A. Guest",
        "phone": "555-0199",
        "date": "2026-11-20",
        "event_type": EventType.MUSIC,
    }
    data.update(overrides)
    return BookingCreate(**data)


def test_terminal_states_have_no_exits():
    assert ALLOWED_TRANSITIONS[BookingStatus.CONFIRMED] == frozenset()
    assert ALLOWED_TRANSITIONS[BookingStatus.REJECTED] == frozenset()
    assert can_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED)
    assert can_transition(BookingStatus.PENDING, BookingStatus.REJECTED)
    assert not can_transition(BookingStatus.CONFIRMED, BookingStatus.REJECTED)
    assert not can_transition(BookingStatus.REJECTED, BookingStatus.CONFIRMED)


@pytest.mark.asyncio
async def test_anonymous_booking_is_a_validation_error(repos, test_event):
    with pytest.raises(ValidationError) as exc_info:
        await create_booking(repos, None, booking_form(test_event.id))
    assert exc_info.value.field == "consumer"


@pytest.mark.asyncio
async def test_transition_error_reports_states(repos, hotel, consumer, test_event):
    booking = await create_booking(repos, consumer, booking_form(test_event.id))
    await transition_status(repos, hotel, booking.id, BookingStatus.REJECTED)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await transition_status(repos, hotel, booking.id, BookingStatus.CONFIRMED)
    assert exc_info.value.current == "rejected"
    assert exc_info.value.requested == "confirmed"

    stored = await repos.bookings.get(booking.id)
    assert stored.status == "rejected"


@pytest.mark.asyncio
async def test_conditional_update_refuses_stale_state(repos, consumer, test_event):
    booking = await create_booking(repos, consumer, booking_form(test_event.id))

    assert await repos.bookings.change_status(booking.id, "pending", "confirmed") is True
    assert await repos.bookings.change_status(booking.id, "pending", "rejected") is False

    stored = await repos.bookings.get(booking.id)
    assert stored.status == "confirmed"


@pytest.mark.asyncio
async def test_lost_race_raises_invalid_transition(repos, hotel, consumer, test_event, monkeypatch):
    """Another session rejects the booking between our read and our write."""
    booking = await create_booking(repos, consumer, booking_form(test_event.id))
    real_get = repos.bookings.get
    raced = False

    async def get_then_race(booking_id):
        nonlocal raced
        found = await real_get(booking_id)
        if not raced:
            raced = True
            await repos.bookings.change_status(booking_id, "pending", "rejected")
        return found

    monkeypatch.setattr(repos.bookings, "get", get_then_race)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await transition_status(repos, hotel, booking.id, BookingStatus.CONFIRMED)
    assert exc_info.value.current == "rejected"

    stored = await real_get(booking.id)
    assert stored.status == "rejected"


@pytest.mark.asyncio
async def test_booking_publishes_change(repos, feed, consumer, test_event):
    subscription = await feed.subscribe(["bookings"])
    await create_booking(repos, consumer, booking_form(test_event.id))
    assert await asyncio.wait_for(subscription.wait(), timeout=1) == "bookings"
    await subscription.close()


@pytest.mark.asyncio
async def test_unknown_status_string_is_a_validation_error(repos, hotel, consumer, test_event):
    booking = await create_booking(repos, consumer, booking_form(test_event.id))

    with pytest.raises(ValidationError) as exc_info:
        await transition_status(repos, hotel, booking.id, "cancelled")
    assert exc_info.value.field == "status"

    stored = await repos.bookings.get(booking.id)
    assert stored.status == "pending"
