"""Data handed to badge renderers on a successful admission."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict

from .registrant import RegistrantRecord


@dataclass(frozen=True, slots=True)
class EventContext:
    name: str
    date: str = ""
    venue: str = ""

    def as_payload(self) -> Dict[str, str]:
        return {"name": self.name, "date": self.date, "venue": self.venue}


@dataclass(frozen=True, slots=True)
class BadgeView:
    """Minimum registrant contract every badge renderer can rely on."""

    ticket_code: str
    name: str | None
    company: str | None
    category: str | None

    @classmethod
    def from_record(cls, record: RegistrantRecord) -> "BadgeView":
        return cls(
            ticket_code=record.ticket_code,
            name=record.name,
            company=record.company,
            category=record.category,
        )

    def as_payload(self) -> Dict[str, Any]:
        return {
            "ticket_code": self.ticket_code,
            "name": self.name,
            "company": self.company,
            "category": self.category,
        }


@dataclass(frozen=True, slots=True)
class BadgeOptions:
    event: EventContext
    include_qr_code: bool = True
    qr_payload: Dict[str, Any] = field(default_factory=dict)

    def as_payload(self) -> Dict[str, Any]:
        return {
            "includeQRCode": self.include_qr_code,
            "qrPayload": dict(self.qr_payload),
            "event": self.event.as_payload(),
        }


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def badge_filename(ticket_code: str) -> str:
    safe_code = _UNSAFE_FILENAME_CHARS.sub("_", ticket_code)
    return f"ticket-{safe_code}.pdf"


__all__ = ["BadgeOptions", "BadgeView", "EventContext", "badge_filename"]
