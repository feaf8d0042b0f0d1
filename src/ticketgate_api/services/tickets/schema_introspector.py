"""Runtime discovery of ticket-identifier columns per collection."""

from __future__ import annotations

import asyncio
from typing import Dict, List

from loguru import logger
from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.domain.tickets.columns import EMPTY_CANDIDATES, ColumnCandidateSet, ticket_columns

from .store import describe_error, rollback_quietly, run_bounded


def _column_names(connection: Connection, collection: str) -> List[str]:
    return [column["name"] for column in inspect(connection).get_columns(collection)]


class SchemaIntrospector:
    """Memoizes the ticket-like columns of each collection for the process lifetime.

    Schemas are not expected to change while the service runs; a restart picks
    up migrations. Failed introspection is never cached, so a transient store
    error only skips the collection for the current request.
    """

    def __init__(self, *, timeout_seconds: float | None = None) -> None:
        self._timeout = timeout_seconds
        self._cache: Dict[str, ColumnCandidateSet] = {}

    def cached(self, collection: str) -> ColumnCandidateSet | None:
        return self._cache.get(collection)

    def clear(self) -> None:
        self._cache.clear()

    async def discover(self, session: AsyncSession, collection: str) -> ColumnCandidateSet:
        cached = self._cache.get(collection)
        if cached is not None:
            return cached

        try:
            connection = await run_bounded(session.connection(), self._timeout)
            names = await run_bounded(connection.run_sync(_column_names, collection), self._timeout)
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            logger.warning(
                "Ticket column introspection failed",
                collection=collection,
                error=describe_error(exc),
            )
            await rollback_quietly(session)
            return EMPTY_CANDIDATES

        candidates = ticket_columns(names)
        if not candidates:
            logger.debug("No ticket-like columns found", collection=collection)
        self._cache[collection] = candidates
        return candidates


__all__ = ["SchemaIntrospector"]
