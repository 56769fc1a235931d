"""
Async engine and session factory.

Each repository call opens its own short-lived session from this factory,
so nothing here is request-scoped.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from venuebook.core.config import get_settings

settings = get_settings()


def create_engine() -> AsyncEngine:
    kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if settings.DATABASE_URL.startswith("postgresql"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_async_engine(settings.DATABASE_URL, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
