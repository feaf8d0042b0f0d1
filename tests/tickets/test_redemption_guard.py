from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from ticketgate_api.domain.tickets.registrant import RegistrantRecord
from ticketgate_api.models import Ticket
from ticketgate_api.services.tickets.errors import PaymentRequiredError
from ticketgate_api.services.tickets.redemption_guard import RedemptionGuard

FREE_MARKERS = ("free", "general", "complimentary")
ACCEPTED = ("paid", "captured", "success", "completed")


class _Clock:
    def __init__(self, *moments: datetime) -> None:
        self._moments = list(moments)

    def __call__(self) -> datetime:
        return self._moments.pop(0)


def _guard(ticket_collection: str = "tickets", clock=None) -> RedemptionGuard:
    kwargs = {"clock": clock} if clock is not None else {}
    return RedemptionGuard(
        ticket_collection=ticket_collection,
        free_markers=FREE_MARKERS,
        accepted_statuses=ACCEPTED,
        **kwargs,
    )


def _record(code: str, category: str, payment_status: str | None, collection: str = "tickets") -> RegistrantRecord:
    return RegistrantRecord(
        ticket_code=code,
        collection=collection,
        category=category,
        payment_status=payment_status,
    )


async def _seed_ticket(session_factory, code: str, category: str, payment_status: str | None) -> None:
    async with session_factory() as session:
        session.add(Ticket(ticket_code=code, category=category, payment_status=payment_status))
        await session.commit()


async def _redemption_state(session_factory, code: str):
    async with session_factory() as session:
        result = await session.execute(select(Ticket.used, Ticket.printed_at).where(Ticket.ticket_code == code))
        return result.one()


@pytest.mark.asyncio
async def test_free_ticket_is_admitted_and_marked_used(session_factory):
    await _seed_ticket(session_factory, "FREE-1", "General", None)

    async with session_factory() as session:
        result = await _guard().admit(session, _record("FREE-1", "General", None))

    assert result.eligibility.free_tier
    assert result.bookkeeping.succeeded
    assert result.bookkeeping.rows_affected == 1

    used, printed_at = await _redemption_state(session_factory, "FREE-1")
    assert used is True
    assert printed_at is not None


@pytest.mark.asyncio
async def test_unpaid_ticket_is_refused_before_any_write(session_factory):
    await _seed_ticket(session_factory, "DLG-1", "Delegate", "pending")

    async with session_factory() as session:
        with pytest.raises(PaymentRequiredError) as excinfo:
            await _guard().admit(session, _record("DLG-1", "Delegate", "pending"))

    assert excinfo.value.status_code == 402
    assert excinfo.value.payment_status == "pending"

    used, printed_at = await _redemption_state(session_factory, "DLG-1")
    assert used is False
    assert printed_at is None


@pytest.mark.asyncio
async def test_rescan_is_admitted_again_and_refreshes_timestamp(session_factory):
    await _seed_ticket(session_factory, "DLG-2", "Delegate", "paid")
    first = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
    second = datetime(2026, 10, 19, 9, 5, tzinfo=timezone.utc)
    guard = _guard(clock=_Clock(first, second))
    record = _record("DLG-2", "Delegate", "PAID")

    async with session_factory() as session:
        await guard.admit(session, record)
    _, first_printed = await _redemption_state(session_factory, "DLG-2")

    async with session_factory() as session:
        again = await guard.admit(session, record)
    used, second_printed = await _redemption_state(session_factory, "DLG-2")

    assert again.bookkeeping.succeeded
    assert used is True
    assert first_printed.replace(tzinfo=None) == first.replace(tzinfo=None)
    assert second_printed.replace(tzinfo=None) == second.replace(tzinfo=None)


@pytest.mark.asyncio
async def test_role_record_without_ticket_row_is_still_admitted(session_factory):
    async with session_factory() as session:
        result = await _guard().admit(session, _record("SPK-1", "Speaker", "completed", collection="speakers"))

    assert result.bookkeeping.succeeded
    assert result.bookkeeping.rows_affected == 0


@pytest.mark.asyncio
async def test_failed_bookkeeping_does_not_block_admission(session_factory):
    async with session_factory() as session:
        result = await _guard(ticket_collection="missing_tickets").admit(
            session, _record("FREE-2", "Complimentary", None)
        )

    assert result.eligibility.eligible
    assert result.bookkeeping.attempted
    assert not result.bookkeeping.succeeded
    assert result.bookkeeping.error
