"""Async engine and request-scoped sessions for the registrant store."""

from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ticketgate_api.core.settings import settings


def _build_engine(database_url: str) -> AsyncEngine:
    options: dict = {"future": True, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return create_async_engine(database_url, **options)


engine = _build_engine(settings.database_url)

async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a pooled session; the connection goes back to the pool on every exit path."""

    async with async_session() as session:
        yield session
