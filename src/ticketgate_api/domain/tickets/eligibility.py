"""Admission rules for free and paid ticket tiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .registrant import RegistrantRecord

PAYMENT_REQUIRED = "payment_required"


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    eligible: bool
    free_tier: bool
    reason: str | None = None


def is_free_category(
    category: str | None,
    free_markers: Iterable[str],
    free_categories: Iterable[str] = (),
) -> bool:
    """Markers match anywhere in the category; ``free_categories`` must match it whole."""

    normalized = (category or "").strip().lower()
    if not normalized:
        return False
    if normalized in {value.strip().lower() for value in free_categories}:
        return True
    return any(marker.lower() in normalized for marker in free_markers if marker)


def evaluate_eligibility(
    record: RegistrantRecord,
    *,
    free_markers: Iterable[str],
    accepted_statuses: Iterable[str],
    free_categories: Iterable[str] = (),
) -> EligibilityResult:
    """Decide whether ``record`` may be admitted.

    Free tiers are always admitted. Paid tiers need a payment status in
    ``accepted_statuses`` (case-insensitive); a missing status is a refusal.
    """

    if is_free_category(record.category, free_markers, free_categories):
        return EligibilityResult(eligible=True, free_tier=True)

    status = (record.payment_status or "").strip().lower()
    accepted = {value.strip().lower() for value in accepted_statuses}
    if status and status in accepted:
        return EligibilityResult(eligible=True, free_tier=False)
    return EligibilityResult(eligible=False, free_tier=False, reason=PAYMENT_REQUIRED)


__all__ = ["EligibilityResult", "PAYMENT_REQUIRED", "evaluate_eligibility", "is_free_category"]
