"""Entrance scan orchestration: payload → ticket key → registrant → admission → badge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ticketgate_api.core.settings import settings
from ticketgate_api.domain.tickets.payload import normalize
from ticketgate_api.domain.tickets.registrant import RegistrantRecord
from ticketgate_api.observability.scans import ScanObservabilityStore, get_scan_store

from .badges import BadgeArtifact, BadgeService, build_badge_service
from .entity_resolver import EntityResolver
from .errors import BadInputError, TicketNotFoundError, TicketScanError
from .redemption_guard import AdmitResult, RedemptionGuard
from .schema_introspector import SchemaIntrospector
from .store import ensure_store_available


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    admission: AdmitResult
    artifact: BadgeArtifact

    @property
    def record(self) -> RegistrantRecord:
        return self.admission.record


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


class TicketScanService:
    """Runs one scan request against a single request-scoped session."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        resolver: EntityResolver,
        guard: RedemptionGuard,
        badges: BadgeService,
        store_timeout_seconds: float | None = None,
        observability: ScanObservabilityStore | None = None,
    ) -> None:
        self._session = session
        self._resolver = resolver
        self._guard = guard
        self._badges = badges
        self._store_timeout = store_timeout_seconds
        self._observability = observability or get_scan_store()

    @staticmethod
    def extract_key(ticket_id: Any = None, raw: Any = None) -> str:
        """Pick the incoming identifier (``ticket_id`` first) and normalize it."""

        incoming = ticket_id if _present(ticket_id) else raw
        if not _present(incoming):
            raise BadInputError("ticketId or raw payload required")
        key = normalize(incoming)
        if key is None:
            raise BadInputError()
        return key

    async def lookup(self, *, ticket_id: Any = None, raw: Any = None) -> RegistrantRecord:
        """Resolve the registrant without admitting or redeeming anything."""

        try:
            record = await self._locate(ticket_id, raw)
        except TicketScanError as exc:
            self._observability.record_failure(exc.outcome, exc.message)
            raise
        self._observability.record_lookup(collection=record.collection)
        return record

    async def scan(self, *, ticket_id: Any = None, raw: Any = None) -> ScanOutcome:
        try:
            record = await self._locate(ticket_id, raw)
            admission = await self._guard.admit(self._session, record)
        except TicketScanError as exc:
            self._observability.record_failure(exc.outcome, exc.message)
            raise

        artifact = await self._badges.render(record)
        self._observability.record_admission(
            ticket_code=record.ticket_code,
            collection=record.collection,
            renderer=artifact.renderer,
            bookkeeping_succeeded=admission.bookkeeping.succeeded,
        )
        return ScanOutcome(admission=admission, artifact=artifact)

    async def _locate(self, ticket_id: Any, raw: Any) -> RegistrantRecord:
        key = self.extract_key(ticket_id, raw)
        await ensure_store_available(self._session, self._store_timeout)
        record = await self._resolver.resolve(self._session, key)
        if record is None:
            raise TicketNotFoundError(key)
        return record


_INTROSPECTOR: SchemaIntrospector | None = None


def get_schema_introspector() -> SchemaIntrospector:
    global _INTROSPECTOR
    if _INTROSPECTOR is None:
        _INTROSPECTOR = SchemaIntrospector(timeout_seconds=settings.store_call_timeout_seconds)
    return _INTROSPECTOR


def build_scan_service(session: AsyncSession) -> TicketScanService:
    """Wire a scan service from current settings around ``session``."""

    timeout = settings.store_call_timeout_seconds
    resolver = EntityResolver(
        get_schema_introspector(),
        ticket_collection=settings.ticket_collection,
        role_collections=settings.role_collections,
        timeout_seconds=timeout,
    )
    guard = RedemptionGuard(
        ticket_collection=settings.ticket_collection,
        free_markers=settings.free_category_markers,
        accepted_statuses=settings.accepted_payment_statuses,
        free_categories=settings.free_categories,
        timeout_seconds=timeout,
    )
    return TicketScanService(
        session,
        resolver=resolver,
        guard=guard,
        badges=build_badge_service(),
        store_timeout_seconds=timeout,
    )


__all__ = ["ScanOutcome", "TicketScanService", "build_scan_service", "get_schema_introspector"]
