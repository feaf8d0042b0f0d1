"""Admission decision plus the advisory "mark redeemed" bookkeeping write."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable

from loguru import logger
from sqlalchemy import Boolean, DateTime, column, table, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.domain.tickets.eligibility import EligibilityResult, evaluate_eligibility
from ticketgate_api.domain.tickets.registrant import RegistrantRecord

from .errors import PaymentRequiredError
from .store import describe_error, rollback_quietly, run_bounded


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class BookkeepingResult:
    """Outcome of the redemption write. Advisory only: never blocks admission."""

    attempted: bool
    succeeded: bool
    rows_affected: int = 0
    error: str | None = None


@dataclass(frozen=True, slots=True)
class AdmitResult:
    record: RegistrantRecord
    eligibility: EligibilityResult
    bookkeeping: BookkeepingResult


class RedemptionGuard:
    """Admits eligible tickets and records the redemption.

    Re-scanning an already redeemed ticket is admitted again; the write simply
    sets the same flag and refreshes the timestamp.
    """

    def __init__(
        self,
        *,
        ticket_collection: str,
        free_markers: Iterable[str],
        accepted_statuses: Iterable[str],
        free_categories: Iterable[str] = (),
        timeout_seconds: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ticket_collection = ticket_collection
        self._free_markers = tuple(free_markers)
        self._accepted_statuses = tuple(accepted_statuses)
        self._free_categories = tuple(free_categories)
        self._timeout = timeout_seconds
        self._clock = clock

    def check(self, record: RegistrantRecord) -> EligibilityResult:
        return evaluate_eligibility(
            record,
            free_markers=self._free_markers,
            accepted_statuses=self._accepted_statuses,
            free_categories=self._free_categories,
        )

    async def admit(self, session: AsyncSession, record: RegistrantRecord) -> AdmitResult:
        eligibility = self.check(record)
        if not eligibility.eligible:
            logger.info(
                "Ticket admission refused",
                ticket_code=record.ticket_code,
                category=record.category,
                payment_status=record.payment_status,
                reason=eligibility.reason,
            )
            raise PaymentRequiredError(record.ticket_code, record.payment_status)

        bookkeeping = await self.mark_redeemed(session, record.ticket_code)
        return AdmitResult(record=record, eligibility=eligibility, bookkeeping=bookkeeping)

    async def mark_redeemed(self, session: AsyncSession, ticket_code: str) -> BookkeepingResult:
        """Single-statement ``UPDATE ... SET used, printed_at WHERE ticket_code = :code``."""

        tickets = table(
            self._ticket_collection,
            column("ticket_code"),
            column("used", Boolean),
            column("printed_at", DateTime(timezone=True)),
        )
        statement = (
            update(tickets)
            .where(tickets.c.ticket_code == ticket_code)
            .values(used=True, printed_at=self._clock())
        )

        async def _write() -> int:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount or 0

        try:
            rows = await run_bounded(_write(), self._timeout)
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            error = describe_error(exc)
            logger.warning(
                "Ticket redemption bookkeeping failed",
                ticket_code=ticket_code,
                collection=self._ticket_collection,
                error=error,
            )
            await rollback_quietly(session)
            return BookkeepingResult(attempted=True, succeeded=False, error=error)

        if rows == 0:
            logger.debug(
                "No ticket row to mark redeemed",
                ticket_code=ticket_code,
                collection=self._ticket_collection,
            )
        return BookkeepingResult(attempted=True, succeeded=True, rows_affected=rows)


__all__ = ["AdmitResult", "BookkeepingResult", "RedemptionGuard"]
