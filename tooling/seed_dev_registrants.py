"""Seed sample registrants so the gate scanner can be exercised locally."""

from __future__ import annotations

import asyncio
from typing import TypedDict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ticketgate_api.core.settings import settings
from ticketgate_api.models import Partner, Speaker, Ticket, Visitor


class SeedTicket(TypedDict):
    ticket_code: str
    entity_type: str
    name: str
    company: str
    category: str
    payment_status: str | None


DEV_TICKETS: list[SeedTicket] = [
    {
        "ticket_code": "TKT-DEV-0001",
        "entity_type": "visitor",
        "name": "Gate QA Visitor",
        "company": "Dev Rail Co",
        "category": "General",
        "payment_status": None,
    },
    {
        "ticket_code": "TKT-DEV-0002",
        "entity_type": "visitor",
        "name": "Gate QA Delegate",
        "company": "Dev Rail Co",
        "category": "Delegate",
        "payment_status": "paid",
    },
    {
        "ticket_code": "TKT-DEV-0003",
        "entity_type": "visitor",
        "name": "Gate QA Unpaid",
        "company": "Dev Rail Co",
        "category": "Delegate",
        "payment_status": "pending",
    },
]


async def seed_registrants(session: AsyncSession) -> None:
    for seed in DEV_TICKETS:
        existing = await session.execute(select(Ticket).where(Ticket.ticket_code == seed["ticket_code"]))
        if existing.scalar_one_or_none() is None:
            session.add(Ticket(**seed))

    speaker_code = "SPK-DEV-0001"
    existing = await session.execute(select(Speaker).where(Speaker.ticket_code == speaker_code))
    if existing.scalar_one_or_none() is None:
        session.add(
            Speaker(
                full_name="Gate QA Speaker",
                email="speaker@ticketgate.dev",
                organization="Dev Signalling Ltd",
                ticket_code=speaker_code,
                ticket_category="Speaker",
                payment_status="completed",
            )
        )

    visitor_code = "VIS-DEV-0001"
    existing = await session.execute(select(Visitor).where(Visitor.ticket_code == visitor_code))
    if existing.scalar_one_or_none() is None:
        session.add(
            Visitor(
                name="Gate QA Walk-in",
                email="visitor@ticketgate.dev",
                company="Dev Freight",
                ticket_code=visitor_code,
                ticket_category="Free",
                slots=["day-1"],
            )
        )

    partner_code = "PRT-DEV-0001"
    existing = await session.execute(select(Partner).where(Partner.code == partner_code))
    if existing.scalar_one_or_none() is None:
        session.add(
            Partner(
                name="Gate QA Partner",
                email="partner@ticketgate.dev",
                org="Dev Rolling Stock",
                code=partner_code,
                category="Partner",
                status="paid",
            )
        )

    await session.commit()


async def main() -> None:
    engine = create_async_engine(settings.database_url, future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    try:
        async with session_factory() as session:
            await seed_registrants(session)
        print("Development registrants ready")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
