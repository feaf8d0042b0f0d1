from __future__ import annotations

from typing import Dict, Literal

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.core.settings import settings
from ticketgate_api.db.session import get_session
from ticketgate_api.services.tickets.scan_service import get_schema_introspector
from ticketgate_api.services.tickets.store import describe_error, run_bounded


router = APIRouter()


class ComponentStatus(BaseModel):
    status: Literal["ready", "disabled", "error", "degraded"]
    detail: str | None = Field(default=None, description="Human readable status detail")


class ReadinessPayload(BaseModel):
    status: Literal["ready", "degraded", "error"]
    components: Dict[str, ComponentStatus]


@router.get("/healthz", summary="Service health check")
async def service_health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", summary="Service readiness", response_model=ReadinessPayload)
async def service_readiness(session: AsyncSession = Depends(get_session)) -> ReadinessPayload:
    components: Dict[str, ComponentStatus] = {}
    status: Literal["ready", "degraded", "error"] = "ready"

    try:
        await run_bounded(session.execute(text("SELECT 1")), settings.store_call_timeout_seconds)
    except (SQLAlchemyError, OSError, TimeoutError) as exc:
        logger.warning("Readiness database probe failed", error=describe_error(exc))
        components["database"] = ComponentStatus(status="error", detail=describe_error(exc))
        status = "error"
    else:
        components["database"] = ComponentStatus(status="ready")

    introspector = get_schema_introspector()
    collections = [settings.ticket_collection, *settings.role_collections]
    unsearchable = [name for name in collections if introspector.cached(name) == frozenset()]
    if unsearchable:
        components["ticket_collections"] = ComponentStatus(
            status="degraded",
            detail=f"No ticket-like columns in: {', '.join(unsearchable)}",
        )
        status = "degraded" if status != "error" else status
    else:
        components["ticket_collections"] = ComponentStatus(
            status="ready",
            detail=f"Lookup order: {', '.join(collections)}",
        )

    if settings.badge_renderer_url:
        components["badge_renderer"] = ComponentStatus(
            status="ready",
            detail="Remote renderer configured with local fallback",
        )
    else:
        components["badge_renderer"] = ComponentStatus(
            status="disabled",
            detail="Remote renderer not configured; badges rendered locally",
        )

    return ReadinessPayload(status=status, components=components)
