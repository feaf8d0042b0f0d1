from __future__ import annotations

import pytest

from ticketgate_api.domain.tickets.eligibility import PAYMENT_REQUIRED, evaluate_eligibility, is_free_category
from ticketgate_api.domain.tickets.registrant import RegistrantRecord

FREE_MARKERS = ("free", "general", "complimentary")
FREE_CATEGORIES = ("0",)
ACCEPTED = ("paid", "captured", "success", "completed")


def _record(category: str | None, payment_status: str | None) -> RegistrantRecord:
    return RegistrantRecord(
        ticket_code="T-1",
        collection="tickets",
        category=category,
        payment_status=payment_status,
    )


@pytest.mark.parametrize(
    "category",
    ["Free", "General Admission", "COMPLIMENTARY pass", "0", " 0 "],
)
def test_free_categories(category):
    assert is_free_category(category, FREE_MARKERS, FREE_CATEGORIES)


@pytest.mark.parametrize("category", [None, "", "Delegate", "VIP 2026", "10"])
def test_paid_categories(category):
    assert not is_free_category(category, FREE_MARKERS, FREE_CATEGORIES)


def test_free_tier_is_admitted_without_payment():
    result = evaluate_eligibility(_record("General", None), free_markers=FREE_MARKERS, accepted_statuses=ACCEPTED)

    assert result.eligible
    assert result.free_tier


@pytest.mark.parametrize("status", ["paid", "PAID", " Captured ", "success", "completed"])
def test_paid_tier_with_accepted_status(status):
    result = evaluate_eligibility(_record("Delegate", status), free_markers=FREE_MARKERS, accepted_statuses=ACCEPTED)

    assert result.eligible
    assert not result.free_tier


@pytest.mark.parametrize("status", [None, "", "pending", "failed", "refunded"])
def test_paid_tier_without_accepted_status_is_refused(status):
    result = evaluate_eligibility(_record("Delegate", status), free_markers=FREE_MARKERS, accepted_statuses=ACCEPTED)

    assert not result.eligible
    assert result.reason == PAYMENT_REQUIRED


def test_missing_category_is_treated_as_paid_tier():
    refused = evaluate_eligibility(_record(None, None), free_markers=FREE_MARKERS, accepted_statuses=ACCEPTED)
    admitted = evaluate_eligibility(_record(None, "paid"), free_markers=FREE_MARKERS, accepted_statuses=ACCEPTED)

    assert not refused.eligible
    assert admitted.eligible


def test_markers_are_configurable():
    result = evaluate_eligibility(_record("Student", None), free_markers=("student",), accepted_statuses=ACCEPTED)

    assert result.eligible


def test_zero_category_is_free_only_when_configured():
    assert not is_free_category("0", FREE_MARKERS)
    assert is_free_category("0", FREE_MARKERS, FREE_CATEGORIES)
    assert not is_free_category("Tier 0", FREE_MARKERS, FREE_CATEGORIES)


def test_whole_category_matches_are_configurable():
    result = evaluate_eligibility(
        _record("Press", None),
        free_markers=FREE_MARKERS,
        accepted_statuses=ACCEPTED,
        free_categories=("press", "0"),
    )
    refused = evaluate_eligibility(
        _record("Press Plus", None),
        free_markers=FREE_MARKERS,
        accepted_statuses=ACCEPTED,
        free_categories=("press", "0"),
    )

    assert result.eligible and result.free_tier
    assert not refused.eligible
