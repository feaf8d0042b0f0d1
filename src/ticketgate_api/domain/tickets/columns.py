"""Recognize which stored attributes may hold a ticket identifier."""

from __future__ import annotations

import re
from typing import Iterable

TICKET_COLUMN_PATTERN = re.compile(
    r"^(ticket_?code|ticket_?id|ticket_?no|code|c)$",
    re.IGNORECASE,
)

ColumnCandidateSet = frozenset[str]

EMPTY_CANDIDATES: ColumnCandidateSet = frozenset()


def ticket_columns(column_names: Iterable[str]) -> ColumnCandidateSet:
    """Return the subset of ``column_names`` that look like ticket identifiers.

    An empty result means the collection cannot be searched by ticket key and
    must be skipped; there is no full-table fallback.
    """

    return frozenset(
        name for name in column_names if name and TICKET_COLUMN_PATTERN.match(name)
    )


__all__ = ["ColumnCandidateSet", "EMPTY_CANDIDATES", "TICKET_COLUMN_PATTERN", "ticket_columns"]
