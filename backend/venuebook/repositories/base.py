"""
Shared plumbing for repositories.

Every repository call runs in its own short transaction, the way a
document-store round trip would; nothing spans two calls.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from venuebook.services.interfaces.change_feed import ChangeFeed


class Repository:
    collection: str = ""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], feed: ChangeFeed):
        self._session_factory = session_factory
        self._feed = feed

    @asynccontextmanager
    async def _read(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[AsyncSession]:
        """Commit on clean exit, then tell subscribers the collection changed."""
        async with self._session_factory() as session:
            async with session.begin():
                yield session
        await self._feed.publish(self.collection)


def contains(column, text: str):
    """Case-insensitive substring match."""
    return column.ilike(f"%{escape_like(text)}%", escape="\\")


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
