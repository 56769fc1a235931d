"""
Live queries.

A LiveQuery is the standing form of a read: iterating it yields the full
current result set, then a fresh full result set after every change to the
collections it watches, until it is closed.

    async with watch_active_events(repos) as live:
        async for events in live:
            render(events)

The subscription is taken out before the first fetch so no write can slip
between the initial snapshot and the first notification. If a refresh fails
the error is logged and the fetch retried; the last good result set stays
available as `snapshot` in the meantime.
"""

import asyncio
from typing import Awaitable, Callable, Generic, Iterable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from venuebook.core.config import get_settings
from venuebook.core.logging import get_logger
from venuebook.core.metrics import live_subscriptions, live_refresh_failures
from venuebook.services.interfaces.change_feed import ChangeFeed, ChangeSubscription

logger = get_logger(__name__)
settings = get_settings()

T = TypeVar("T")


class LiveQuery(Generic[T]):
    def __init__(
        self,
        feed: ChangeFeed,
        collections: Iterable[str],
        fetch: Callable[[], Awaitable[list[T]]],
        name: str = "live_query",
        retry_delay: Optional[float] = None,
    ):
        self._feed = feed
        self._collections = tuple(collections)
        self._fetch = fetch
        self._name = name
        self._retry_delay = settings.LIVE_RETRY_SECONDS if retry_delay is None else retry_delay
        self._subscription: Optional[ChangeSubscription] = None
        self._closed = False
        self.snapshot: Optional[list[T]] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "LiveQuery[T]":
        return self

    async def __anext__(self) -> list[T]:
        if self._closed:
            raise StopAsyncIteration

        if self._subscription is None:
            self._subscription = await self._feed.subscribe(self._collections)
            live_subscriptions.inc()
            logger.debug("live_query_opened", query=self._name, collections=self._collections)
        else:
            changed = await self._subscription.wait()
            logger.debug("live_query_changed", query=self._name, collection=changed)

        self.snapshot = await self._refresh()
        return self.snapshot

    async def _refresh(self) -> list[T]:
        while True:
            try:
                return await self._fetch()
            except (SQLAlchemyError, OSError) as e:
                live_refresh_failures.inc()
                logger.warning(
                    "live_query_refresh_failed",
                    query=self._name,
                    error=str(e),
                    retry_in=self._retry_delay,
                    has_snapshot=self.snapshot is not None,
                )
                await asyncio.sleep(self._retry_delay)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            await self._subscription.close()
            self._subscription = None
            live_subscriptions.dec()
            logger.debug("live_query_closed", query=self._name)

    async def __aenter__(self) -> "LiveQuery[T]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
