"""Bounded store calls shared by the scan engine components."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from loguru import logger
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import StoreUnavailableError

T = TypeVar("T")


async def run_bounded(awaitable: Awaitable[T], timeout_seconds: float | None) -> T:
    """Await ``awaitable``, raising ``asyncio.TimeoutError`` past ``timeout_seconds``."""

    if timeout_seconds is None or timeout_seconds <= 0:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout_seconds)


def describe_error(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def rollback_quietly(session: AsyncSession) -> None:
    """Reset the session after a failed statement so later lookups can run."""

    try:
        await session.rollback()
    except SQLAlchemyError as exc:
        logger.warning("Session rollback after failed store call did not complete", error=describe_error(exc))


async def ensure_store_available(session: AsyncSession, timeout_seconds: float | None) -> None:
    """Check out a pooled connection for ``session`` or raise ``StoreUnavailableError``."""

    try:
        await run_bounded(session.connection(), timeout_seconds)
    except (DBAPIError, OSError, asyncio.TimeoutError) as exc:
        logger.error("Registrant store connection unavailable", error=describe_error(exc))
        raise StoreUnavailableError() from exc


__all__ = ["describe_error", "ensure_store_available", "rollback_quietly", "run_bounded"]
