"""Compact JSON payload printed into badge QR codes.

Keys are kept short so the code stays scannable at badge size:

    c    ticket code         n    name           e    email
    p    phone               o    organization   cat  category
    s    slots               ts   issued at (epoch milliseconds)
    ev   {"n": event name, "d": event date, "v": venue}

``c`` is one of the attribute names the payload normalizer prefers, so a
scanned badge resolves straight back to its ticket key.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable

from .badge import EventContext
from .registrant import RegistrantRecord


def _epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def build_qr_payload(
    record: RegistrantRecord,
    *,
    event: EventContext,
    phone: str | None = None,
    slots: Iterable[str] = (),
    issued_at: datetime | None = None,
) -> Dict[str, Any]:
    moment = issued_at or datetime.now(timezone.utc)
    return {
        "c": record.ticket_code,
        "n": record.name or "",
        "e": record.email or "",
        "p": phone or "",
        "o": record.company or "",
        "cat": record.category or "",
        "s": [str(slot) for slot in slots],
        "ts": _epoch_millis(moment),
        "ev": {"n": event.name, "d": event.date, "v": event.venue},
    }


def encode_qr_payload(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


__all__ = ["build_qr_payload", "encode_qr_payload"]
