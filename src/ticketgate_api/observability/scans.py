"""In-memory observability helper for entrance scans."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class ScanEventLog:
    last_admitted_at: datetime | None = None
    last_admitted_ticket: str | None = None
    last_failure_at: datetime | None = None
    last_failure_outcome: str | None = None
    last_failure_reason: str | None = None


@dataclass
class ScanObservabilitySnapshot:
    outcomes: Dict[str, int]
    collections: Dict[str, int]
    renderers: Dict[str, int]
    bookkeeping: Dict[str, int]
    events: ScanEventLog

    def as_dict(self) -> Dict[str, object]:
        return {
            "outcomes": self.outcomes,
            "collections": self.collections,
            "renderers": self.renderers,
            "bookkeeping": self.bookkeeping,
            "events": {
                "last_admitted_at": _iso(self.events.last_admitted_at),
                "last_admitted_ticket": self.events.last_admitted_ticket,
                "last_failure_at": _iso(self.events.last_failure_at),
                "last_failure_outcome": self.events.last_failure_outcome,
                "last_failure_reason": self.events.last_failure_reason,
            },
        }


@dataclass
class ScanObservabilityStore:
    _lock: Lock = field(default_factory=Lock)
    _outcomes: Counter = field(default_factory=Counter)
    _collections: Counter = field(default_factory=Counter)
    _renderers: Counter = field(default_factory=Counter)
    _bookkeeping: Counter = field(default_factory=Counter)
    _events: ScanEventLog = field(default_factory=ScanEventLog)

    def record_admission(
        self,
        *,
        ticket_code: str,
        collection: str,
        renderer: str,
        bookkeeping_succeeded: bool,
    ) -> None:
        with self._lock:
            self._outcomes["admitted"] += 1
            self._collections[collection] += 1
            self._renderers[renderer] += 1
            self._bookkeeping["succeeded" if bookkeeping_succeeded else "failed"] += 1
            self._events.last_admitted_at = _utcnow()
            self._events.last_admitted_ticket = ticket_code

    def record_lookup(self, *, collection: str) -> None:
        with self._lock:
            self._outcomes["validated"] += 1
            self._collections[collection] += 1

    def record_failure(self, outcome: str, reason: str) -> None:
        with self._lock:
            self._outcomes[outcome] += 1
            self._events.last_failure_at = _utcnow()
            self._events.last_failure_outcome = outcome
            self._events.last_failure_reason = reason

    def snapshot(self) -> ScanObservabilitySnapshot:
        with self._lock:
            events = ScanEventLog(
                last_admitted_at=self._events.last_admitted_at,
                last_admitted_ticket=self._events.last_admitted_ticket,
                last_failure_at=self._events.last_failure_at,
                last_failure_outcome=self._events.last_failure_outcome,
                last_failure_reason=self._events.last_failure_reason,
            )
            return ScanObservabilitySnapshot(
                outcomes=dict(self._outcomes),
                collections=dict(self._collections),
                renderers=dict(self._renderers),
                bookkeeping=dict(self._bookkeeping),
                events=events,
            )

    def reset(self) -> None:
        with self._lock:
            self._outcomes.clear()
            self._collections.clear()
            self._renderers.clear()
            self._bookkeeping.clear()
            self._events = ScanEventLog()


_SCAN_STORE = ScanObservabilityStore()


def get_scan_store() -> ScanObservabilityStore:
    return _SCAN_STORE
