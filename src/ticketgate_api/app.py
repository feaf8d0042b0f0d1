from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger

from ticketgate_api.core.settings import settings
from ticketgate_api.db.session import engine
from .api.routes import api_router
from .api.v1.endpoints.tickets import ticket_request_validation_handler
from .core.logging import configure_logging
from .observability.tracing import configure_tracing


APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Ticket scanning configured",
        ticket_collection=settings.ticket_collection,
        role_collections=settings.role_collections,
        badge_renderer="remote" if settings.badge_renderer_url else "local",
        store_call_timeout_seconds=settings.store_call_timeout_seconds,
    )
    try:
        yield
    finally:
        await engine.dispose()


def create_app() -> FastAPI:
    """Application factory for the ticket gate FastAPI service."""
    configure_logging(
        service_name="ticketgate-api",
        environment=settings.environment,
        version=APP_VERSION,
    )

    app = FastAPI(
        title="Ticket Gate API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    configure_tracing(
        app,
        service_name="ticketgate-api",
        service_version=APP_VERSION,
        environment=settings.environment,
    )

    app.include_router(api_router)
    app.add_exception_handler(RequestValidationError, ticket_request_validation_handler)

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "version": APP_VERSION,
        }

    return app
