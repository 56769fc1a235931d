"""
Tests for the Redis pub/sub change feed, against an in-memory fake server.
"""

import asyncio

import pytest
import pytest_asyncio
from fakeredis import aioredis as fake_aioredis
from prometheus_client import REGISTRY

from venuebook.services import change_feed as change_feed_module
from venuebook.services.change_feed import RedisChangeFeed
from venuebook.services.live_service import LiveQuery


def publish_errors() -> float:
    value = REGISTRY.get_sample_value("change_feed_errors_total", {"operation": "publish"})
    return value or 0.0


@pytest_asyncio.fixture
async def fake_redis(monkeypatch):
    client = fake_aioredis.FakeRedis(decode_responses=True)

    async def get_fake_redis():
        return client

    monkeypatch.setattr(change_feed_module, "get_redis", get_fake_redis)
    yield client
    await client.aclose()


@pytest.fixture
def redis_feed() -> RedisChangeFeed:
    return RedisChangeFeed(channel_prefix="test:changes:", retry_delay=0)


@pytest.mark.asyncio
async def test_notification_reaches_matching_subscription_only(fake_redis, redis_feed):
    events = await redis_feed.subscribe(["events"])
    bookings = await redis_feed.subscribe(["bookings"])

    await redis_feed.publish("events")

    assert await asyncio.wait_for(events.wait(), timeout=2) == "events"
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(bookings.wait(), timeout=0.2)

    await events.close()
    await bookings.close()


@pytest.mark.asyncio
async def test_publish_without_redis_is_logged_not_raised(monkeypatch, redis_feed):
    async def no_redis():
        return None

    monkeypatch.setattr(change_feed_module, "get_redis", no_redis)
    before = publish_errors()

    await redis_feed.publish("events")

    assert publish_errors() == before + 1


@pytest.mark.asyncio
async def test_write_right_after_first_snapshot_is_not_missed(fake_redis, redis_feed):
    rows = [1]

    async def fetch():
        return list(rows)

    async with LiveQuery(redis_feed, ["events"], fetch, retry_delay=0) as live:
        assert await asyncio.wait_for(live.__anext__(), timeout=2) == [1]

        # lands before the iterator asks for the next snapshot
        rows.append(2)
        await redis_feed.publish("events")

        assert await asyncio.wait_for(live.__anext__(), timeout=2) == [1, 2]


@pytest.mark.asyncio
async def test_subscribe_while_redis_down_wakes_once_after_reconnect(fake_redis, monkeypatch, redis_feed):
    available = False

    async def flaky_redis():
        return fake_redis if available else None

    monkeypatch.setattr(change_feed_module, "get_redis", flaky_redis)

    subscription = await redis_feed.subscribe(["bookings"])
    available = True

    # writes may have been missed while down, so the first wait returns at once
    assert await asyncio.wait_for(subscription.wait(), timeout=2) == "bookings"

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(subscription.wait(), timeout=0.2)

    await redis_feed.publish("bookings")
    assert await asyncio.wait_for(subscription.wait(), timeout=2) == "bookings"
    await subscription.close()
