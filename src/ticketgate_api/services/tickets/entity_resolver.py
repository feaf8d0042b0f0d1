"""Find the registrant that owns a ticket key across the registrant collections."""

from __future__ import annotations

import asyncio
from typing import Iterable, Sequence

from loguru import logger
from sqlalchemy import Select, bindparam, column, literal_column, or_, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.domain.tickets.columns import ColumnCandidateSet
from ticketgate_api.domain.tickets.registrant import RegistrantRecord, record_from_row

from .schema_introspector import SchemaIntrospector
from .store import describe_error, rollback_quietly, run_bounded


def build_lookup_statement(collection: str, candidates: ColumnCandidateSet) -> Select:
    """``SELECT * FROM <collection> WHERE (c1 = :ticket_key OR ...) LIMIT 1``."""

    ordered = sorted(candidates)
    source = table(collection, *(column(name) for name in ordered))
    key = bindparam("ticket_key")
    predicate = or_(*(source.c[name] == key for name in ordered))
    return select(literal_column("*")).select_from(source).where(predicate).limit(1)


class EntityResolver:
    """Tries the dedicated ticket collection, then each role collection, in order.

    The first match wins. A failing collection is logged and skipped so one
    broken table never hides a registrant stored elsewhere.
    """

    def __init__(
        self,
        introspector: SchemaIntrospector,
        *,
        ticket_collection: str,
        role_collections: Iterable[str],
        timeout_seconds: float | None = None,
    ) -> None:
        self._introspector = introspector
        self._ticket_collection = ticket_collection
        self._role_collections = tuple(role_collections)
        self._timeout = timeout_seconds

    @property
    def collections(self) -> Sequence[str]:
        return (self._ticket_collection, *self._role_collections)

    async def resolve(self, session: AsyncSession, ticket_key: str) -> RegistrantRecord | None:
        for collection in self.collections:
            record = await self._find_in_collection(session, collection, ticket_key)
            if record is not None:
                logger.info(
                    "Ticket matched registrant",
                    collection=collection,
                    ticket_code=record.ticket_code,
                    entity_id=record.entity_id,
                )
                return record
        logger.info("Ticket not found in any collection", ticket_key=ticket_key)
        return None

    async def _find_in_collection(
        self,
        session: AsyncSession,
        collection: str,
        ticket_key: str,
    ) -> RegistrantRecord | None:
        candidates = await self._introspector.discover(session, collection)
        if not candidates:
            return None

        statement = build_lookup_statement(collection, candidates)
        try:
            result = await run_bounded(session.execute(statement, {"ticket_key": ticket_key}), self._timeout)
            row = result.mappings().first()
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            logger.warning(
                "Ticket lookup failed",
                collection=collection,
                columns=sorted(candidates),
                error=describe_error(exc),
            )
            await rollback_quietly(session)
            return None

        if row is None:
            return None
        return record_from_row(
            row,
            collection=collection,
            ticket_key=ticket_key,
            canonical=collection == self._ticket_collection,
        )


__all__ = ["EntityResolver", "build_lookup_statement"]
