"""Failures surfaced by the ticket scan engine."""

from __future__ import annotations


class TicketScanError(RuntimeError):
    """Base exception for scan failures that reach the caller."""

    status_code = 500
    outcome = "error"
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class BadInputError(TicketScanError):
    """Raised when no ticket key can be extracted from the request."""

    status_code = 400
    outcome = "bad_input"
    default_message = "Could not extract ticket id from payload"


class TicketNotFoundError(TicketScanError):
    """Raised when no collection holds a registrant for the ticket key."""

    status_code = 404
    outcome = "not_found"
    default_message = "Ticket not found"

    def __init__(self, ticket_key: str, message: str | None = None) -> None:
        super().__init__(message)
        self.ticket_key = ticket_key


class PaymentRequiredError(TicketScanError):
    """Raised when a paid-tier ticket has no accepted payment status."""

    status_code = 402
    outcome = "payment_required"
    default_message = "Ticket not paid"

    def __init__(self, ticket_code: str, payment_status: str | None) -> None:
        super().__init__()
        self.ticket_code = ticket_code
        self.payment_status = payment_status


class StoreUnavailableError(TicketScanError):
    """Raised when no connection to the registrant store can be obtained."""

    status_code = 503
    outcome = "store_unavailable"
    default_message = "Registrant store unavailable"


class UnsupportedArtifactError(RuntimeError):
    """Raised when a badge renderer returns something that is not a binary artifact."""


__all__ = [
    "BadInputError",
    "PaymentRequiredError",
    "StoreUnavailableError",
    "TicketNotFoundError",
    "TicketScanError",
    "UnsupportedArtifactError",
]
