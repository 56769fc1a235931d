"""
Tests for live queries and the in-process change feed.
"""

import asyncio

import pytest

from venuebook.schemas.booking import BookingCreate, BookingStatus, EventType
from venuebook.schemas.event import EventUpdate
from venuebook.services.booking_service import (
    create_booking,
    transition_status,
    watch_bookings_for_consumer,
    watch_bookings_for_hotel,
)
from venuebook.services.change_feed import InProcessChangeFeed
from venuebook.services.event_service import create_event, update_event, watch_active_events
from venuebook.services.live_service import LiveQuery
from venuebook.services.saved_event_service import save_event

from conftest import event_form


async def next_snapshot(live, timeout=1.0):
    return await asyncio.wait_for(live.__anext__(), timeout=timeout)


@pytest.mark.asyncio
async def test_first_snapshot_is_current_state(repos, test_event):
    async with watch_active_events(repos) as live:
        snapshot = await next_snapshot(live)
        assert [e.id for e in snapshot] == [test_event.id]
        assert live.snapshot is snapshot


@pytest.mark.asyncio
async def test_new_event_produces_new_snapshot(repos, hotel, test_event):
    async with watch_active_events(repos) as live:
        await next_snapshot(live)
        newer = await create_event(repos, hotel, event_form(title="Food Fair"))

        snapshot = await next_snapshot(live)
        assert [e.id for e in snapshot] == [newer.id, test_event.id]


@pytest.mark.asyncio
async def test_deactivated_event_leaves_active_feed(repos, hotel, test_event):
    async with watch_active_events(repos) as live:
        await next_snapshot(live)
        await update_event(repos, hotel, test_event.id, EventUpdate(status="inactive"))
        assert await next_snapshot(live) == []


@pytest.mark.asyncio
async def test_burst_of_writes_is_coalesced(repos, hotel, test_event):
    async with watch_active_events(repos) as live:
        await next_snapshot(live)
        await create_event(repos, hotel, event_form(title="One"))
        await create_event(repos, hotel, event_form(title="Two"))

        snapshot = await next_snapshot(live)
        assert [e.title for e in snapshot] == ["Two", "One", "Jazz Night"]

        with pytest.raises(asyncio.TimeoutError):
            await next_snapshot(live, timeout=0.1)


@pytest.mark.asyncio
async def test_unrelated_collection_does_not_wake(repos, consumer, test_event):
    async with watch_active_events(repos) as live:
        await next_snapshot(live)
        await save_event(repos, consumer, test_event.id)

        with pytest.raises(asyncio.TimeoutError):
            await next_snapshot(live, timeout=0.1)


@pytest.mark.asyncio
async def test_hotel_pending_inbox_follows_review(repos, hotel, consumer, test_event):
    booking = await create_booking(repos, consumer, BookingCreate(
        event_id=test_event.id,
        full_name="A. Guest",
        phone="555-0199",
        date="2026-11-20",
        event_type=EventType.MUSIC,
    ))

    async with watch_bookings_for_hotel(repos, hotel, status=BookingStatus.PENDING) as inbox, \
            watch_bookings_for_consumer(repos, consumer) as mine:
        assert [b.id for b in await next_snapshot(inbox)] == [booking.id]
        assert [b.status for b in await next_snapshot(mine)] == ["pending"]

        await transition_status(repos, hotel, booking.id, BookingStatus.CONFIRMED)

        assert await next_snapshot(inbox) == []
        assert [b.status for b in await next_snapshot(mine)] == ["confirmed"]


@pytest.mark.asyncio
async def test_close_releases_subscription(repos, feed, test_event):
    live = watch_active_events(repos)
    await next_snapshot(live)
    assert feed.subscriber_count == 1

    await live.close()
    assert feed.subscriber_count == 0
    assert live.closed

    with pytest.raises(StopAsyncIteration):
        await live.__anext__()


@pytest.mark.asyncio
async def test_refresh_failure_keeps_snapshot_and_retries():
    feed = InProcessChangeFeed()
    calls = []

    async def flaky_fetch():
        calls.append(len(calls))
        if len(calls) == 2:
            raise ConnectionError("database unreachable")
        return [len(calls)]

    async with LiveQuery(feed, ["events"], flaky_fetch, retry_delay=0) as live:
        assert await next_snapshot(live) == [1]

        await feed.publish("events")
        assert await next_snapshot(live) == [3]
        assert live.snapshot == [3]
        assert len(calls) == 3


@pytest.mark.asyncio
async def test_feed_only_notifies_matching_subscribers():
    feed = InProcessChangeFeed()
    events = await feed.subscribe(["events"])
    bookings = await feed.subscribe(["bookings"])

    await feed.publish("bookings")

    assert await asyncio.wait_for(bookings.wait(), timeout=1) == "bookings"
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(events.wait(), timeout=0.1)

    await events.close()
    await bookings.close()
    assert feed.subscriber_count == 0
