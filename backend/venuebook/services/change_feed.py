"""
Change feed implementations.

InProcessChangeFeed fans notifications out to asyncio queues and is enough
for a single API process. RedisChangeFeed relays them over Redis pub/sub so
that every process sharing the database sees every write.

A lost notification only delays a live query until the next write, so both
feeds log and count delivery failures instead of failing the write that
triggered them (the write has already been committed).
"""

import asyncio
from typing import Iterable, Optional

from redis.exceptions import RedisError

from venuebook.core.config import get_settings
from venuebook.core.logging import get_logger
from venuebook.core.metrics import change_feed_errors
from venuebook.infrastructure.redis_client import get_redis
from venuebook.services.interfaces.change_feed import ChangeFeed, ChangeSubscription

logger = get_logger(__name__)
settings = get_settings()

LISTEN_POLL_SECONDS = 1.0


class _QueueSubscription(ChangeSubscription):
    def __init__(self, feed: "InProcessChangeFeed", collections: Iterable[str]):
        self._feed = feed
        self.collections = frozenset(collections)
        self.queue: asyncio.Queue = asyncio.Queue()

    async def wait(self) -> str:
        collection = await self.queue.get()
        while not self.queue.empty():
            self.queue.get_nowait()
        return collection

    async def close(self) -> None:
        self._feed._subscribers.discard(self)


class InProcessChangeFeed(ChangeFeed):
    def __init__(self):
        self._subscribers: set[_QueueSubscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def publish(self, collection: str) -> None:
        for subscription in list(self._subscribers):
            if collection in subscription.collections:
                subscription.queue.put_nowait(collection)

    async def subscribe(self, collections: Iterable[str]) -> ChangeSubscription:
        subscription = _QueueSubscription(self, collections)
        self._subscribers.add(subscription)
        return subscription


class _RedisSubscription(ChangeSubscription):
    def __init__(self, feed: "RedisChangeFeed", collections: Iterable[str]):
        self._feed = feed
        self.collections = tuple(collections)
        self._pubsub = None
        self._resync = False

    async def _connect(self) -> None:
        client = await get_redis()
        if client is None:
            raise ConnectionError("Redis is unavailable")
        pubsub = client.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(*(self._feed.channel(c) for c in self.collections))
        self._pubsub = pubsub

    async def _drop_connection(self) -> None:
        if self._pubsub is not None:
            try:
                await self._pubsub.aclose()
            except (RedisError, OSError):
                pass
            self._pubsub = None

    async def wait(self) -> str:
        while True:
            try:
                if self._pubsub is None:
                    await self._connect()
                    if self._resync:
                        # Writes may have happened while disconnected
                        self._resync = False
                        logger.info("change_feed_resubscribed", collections=self.collections)
                        return self.collections[0]

                message = await self._pubsub.get_message(timeout=LISTEN_POLL_SECONDS)
                if message is None:
                    continue
                while await self._pubsub.get_message(timeout=0) is not None:
                    pass
                return message["data"]
            except (RedisError, OSError) as e:
                change_feed_errors.labels(operation="listen").inc()
                logger.warning(
                    "change_feed_listen_failed",
                    error=str(e),
                    retry_in=self._feed.retry_delay,
                )
                await self._drop_connection()
                self._resync = True
                await asyncio.sleep(self._feed.retry_delay)

    async def close(self) -> None:
        await self._drop_connection()


class RedisChangeFeed(ChangeFeed):
    def __init__(
        self,
        channel_prefix: Optional[str] = None,
        retry_delay: Optional[float] = None,
    ):
        self.channel_prefix = channel_prefix or settings.REDIS_CHANNEL_PREFIX
        self.retry_delay = retry_delay if retry_delay is not None else settings.LIVE_RETRY_SECONDS

    def channel(self, collection: str) -> str:
        return f"{self.channel_prefix}{collection}"

    async def publish(self, collection: str) -> None:
        client = await get_redis()
        if client is None:
            change_feed_errors.labels(operation="publish").inc()
            logger.error("change_feed_publish_skipped", collection=collection, reason="redis_unavailable")
            return
        try:
            await client.publish(self.channel(collection), collection)
        except (RedisError, OSError) as e:
            change_feed_errors.labels(operation="publish").inc()
            logger.error("change_feed_publish_failed", collection=collection, error=str(e))

    async def subscribe(self, collections: Iterable[str]) -> ChangeSubscription:
        """Joins the channels before returning, so writes after this call are seen."""
        subscription = _RedisSubscription(self, collections)
        try:
            await subscription._connect()
        except (RedisError, OSError) as e:
            change_feed_errors.labels(operation="listen").inc()
            logger.warning(
                "change_feed_subscribe_failed",
                error=str(e),
                collections=subscription.collections,
            )
            # First wait() reconnects and wakes the caller once
            subscription._resync = True
        return subscription
