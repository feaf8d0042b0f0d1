"""Ticket identity resolution and redemption services."""

from .badges import BadgeArtifact, BadgeService, HttpBadgeRenderer, LocalBadgeRenderer
from .entity_resolver import EntityResolver
from .errors import (
    BadInputError,
    PaymentRequiredError,
    StoreUnavailableError,
    TicketNotFoundError,
    TicketScanError,
)
from .redemption_guard import AdmitResult, BookkeepingResult, RedemptionGuard
from .scan_service import ScanOutcome, TicketScanService, build_scan_service
from .schema_introspector import SchemaIntrospector

__all__ = [
    "AdmitResult",
    "BadInputError",
    "BadgeArtifact",
    "BadgeService",
    "BookkeepingResult",
    "EntityResolver",
    "HttpBadgeRenderer",
    "LocalBadgeRenderer",
    "PaymentRequiredError",
    "RedemptionGuard",
    "ScanOutcome",
    "SchemaIntrospector",
    "StoreUnavailableError",
    "TicketNotFoundError",
    "TicketScanError",
    "TicketScanService",
    "build_scan_service",
]
