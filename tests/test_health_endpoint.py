import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from ticketgate_api.core.settings import settings
from ticketgate_api.services.tickets.scan_service import get_schema_introspector


@pytest.mark.asyncio
async def test_healthcheck(app_with_db):
    app, _ = app_with_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/healthz")
        versioned = await client.get("/api/v1/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert versioned.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_reports_components(app_with_db):
    app, _ = app_with_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/readyz")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ready"
    assert payload["components"]["database"]["status"] == "ready"
    assert payload["components"]["ticket_collections"]["status"] == "ready"
    assert payload["components"]["badge_renderer"]["status"] == "disabled"


@pytest.mark.asyncio
async def test_readiness_degrades_when_a_collection_has_no_ticket_columns(app_with_db, monkeypatch):
    app, session_factory = app_with_db
    async with session_factory() as session:
        await session.execute(text("CREATE TABLE sponsors (id INTEGER PRIMARY KEY, name TEXT)"))
        await session.commit()
        await get_schema_introspector().discover(session, "sponsors")
    monkeypatch.setattr(settings, "role_collections", ["speakers", "sponsors"])
    monkeypatch.setattr(settings, "badge_renderer_url", "https://badges.test/render")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/readyz")

    payload = response.json()
    assert payload["status"] == "degraded"
    assert "sponsors" in payload["components"]["ticket_collections"]["detail"]
    assert payload["components"]["badge_renderer"]["status"] == "ready"
