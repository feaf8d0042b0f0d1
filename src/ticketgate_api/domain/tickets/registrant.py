"""Uniform view over registrant rows from differently shaped collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

_TICKET_CODE_COLUMNS = ("ticket_code", "code", "c")
_NAME_COLUMNS = ("name", "full_name", "n")
_EMAIL_COLUMNS = ("email", "e")
_COMPANY_COLUMNS = ("company", "org", "organization")
_PAYMENT_STATUS_COLUMNS = ("payment_status", "status")
_TRANSACTION_COLUMNS = ("txId", "tx_id", "transaction_id")
_TICKET_CATEGORY_COLUMNS = ("category", "ticket_category")
_ROLE_CATEGORY_COLUMNS = ("ticket_category", "category", "cat")
_ROLE_ID_COLUMNS = ("id", "ID")


@dataclass(frozen=True, slots=True)
class RegistrantRecord:
    """One registrant's ticket, regardless of the collection it was found in."""

    ticket_code: str
    collection: str
    entity_type: str | None = None
    entity_id: str | None = None
    name: str | None = None
    email: str | None = None
    company: str | None = None
    category: str | None = None
    payment_status: str | None = None
    transaction_id: str | None = None
    raw_row: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def as_payload(self) -> Dict[str, Any]:
        return {
            "ticket_code": self.ticket_code,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "name": self.name,
            "email": self.email,
            "company": self.company,
            "category": self.category,
            "payment_status": self.payment_status,
            "transaction_id": self.transaction_id,
            "collection": self.collection,
        }


def _first_present(row: Mapping[str, Any], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = row.get(name)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def singular_entity_type(collection: str) -> str:
    return collection[:-1] if collection.endswith("s") else collection


def record_from_row(
    row: Mapping[str, Any],
    *,
    collection: str,
    ticket_key: str,
    canonical: bool,
) -> RegistrantRecord:
    """Map a raw row onto ``RegistrantRecord``.

    ``canonical`` marks the dedicated ticket collection, whose rows carry their
    own ``entity_type``/``entity_id`` pointing back at the registrant.
    """

    if canonical:
        entity_type = _first_present(row, ("entity_type",))
        entity_id = _first_present(row, ("entity_id",))
        category = _first_present(row, _TICKET_CATEGORY_COLUMNS)
    else:
        entity_type = singular_entity_type(collection)
        entity_id = _first_present(row, _ROLE_ID_COLUMNS)
        category = _first_present(row, _ROLE_CATEGORY_COLUMNS)

    return RegistrantRecord(
        ticket_code=_first_present(row, _TICKET_CODE_COLUMNS) or ticket_key,
        collection=collection,
        entity_type=entity_type,
        entity_id=entity_id,
        name=_first_present(row, _NAME_COLUMNS),
        email=_first_present(row, _EMAIL_COLUMNS),
        company=_first_present(row, _COMPANY_COLUMNS),
        category=category,
        payment_status=_first_present(row, _PAYMENT_STATUS_COLUMNS),
        transaction_id=_first_present(row, _TRANSACTION_COLUMNS),
        raw_row=dict(row),
    )


__all__ = ["RegistrantRecord", "record_from_row", "singular_entity_type"]
