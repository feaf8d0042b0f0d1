"""Request-scoped wiring for the ticket scan engine."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.db.session import get_session
from ticketgate_api.services.tickets.scan_service import TicketScanService, build_scan_service


async def get_scan_service(session: AsyncSession = Depends(get_session)) -> TicketScanService:
    return build_scan_service(session)
