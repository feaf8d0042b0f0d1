"""Recover a canonical ticket key from an arbitrary scan payload.

Scanners at the gate hand us whatever the printed badge encoded: a bare ticket
code, a JSON blob (with one of many historical attribute names), base64-wrapped
JSON, JSON buried inside other text, or just digits. ``normalize`` evaluates a
fixed list of extractors in precedence order and returns the first key found.
Stronger signals always win over the digit fallback.

A bare ticket key is normally returned verbatim. The one exception is a string
of key characters that is also unpadded base64 of a JSON object carrying a
ticket key: that string is decoded instead, so an encoded badge payload never
resolves to its own base64 text. This knowingly gives up "every key-shaped
string maps to itself" for those strings.
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Callable, Iterable, Sequence, TypeVar

TICKET_KEY_PATTERN = re.compile(r"[A-Za-z0-9\-_.]{3,64}")

# Attribute names that have carried the ticket code across badge generations.
PREFERRED_KEYS: tuple[str, ...] = (
    "ticket_code",
    "ticketCode",
    "ticket_id",
    "ticketId",
    "ticket",
    "ticketNo",
    "ticketno",
    "ticketid",
    "code",
    "c",
    "id",
    "tk",
    "t",
)

_BASE64_PATTERN = re.compile(r"[A-Za-z0-9+/=]+")
_WHITESPACE_PATTERN = re.compile(r"\s+")
# Greedy: first "{" through last "}", across lines.
_EMBEDDED_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)
# Leftmost run, greedy up to 12 digits. ASCII digits only.
_DIGIT_RUN_PATTERN = re.compile(r"[0-9]{4,12}")

T = TypeVar("T")
R = TypeVar("R")

Extractor = Callable[[str], str | None]


def first_success(extractors: Iterable[Callable[[T], R | None]], value: T) -> R | None:
    """Return the first non-None result of applying ``extractors`` in order."""

    for extractor in extractors:
        result = extractor(value)
        if result is not None:
            return result
    return None


def is_ticket_key(value: str) -> bool:
    return TICKET_KEY_PATTERN.fullmatch(value) is not None


def _scalar_text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    text = text.strip()
    return text or None


def find_ticket_key(node: Any) -> str | None:
    """Search parsed JSON for a ticket-like attribute.

    Preferred names are checked at the current level first; only when none of
    them holds a usable value do we descend into nested objects and arrays,
    depth-first in document order.
    """

    if isinstance(node, dict):
        for name in PREFERRED_KEYS:
            if name in node:
                candidate = _scalar_text(node[name])
                if candidate:
                    return candidate
        children: Iterable[Any] = node.values()
    elif isinstance(node, list):
        children = node
    else:
        return None

    for child in children:
        if isinstance(child, (dict, list)):
            found = find_ticket_key(child)
            if found:
                return found
    return None


def _parse_json(text: str) -> Any | None:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def _key_from_json_text(text: str) -> str | None:
    parsed = _parse_json(text)
    if parsed is None:
        return None
    return find_ticket_key(parsed)


def _from_base64_json(text: str) -> str | None:
    compact = _WHITESPACE_PATTERN.sub("", text)
    if not compact or len(compact) % 4 != 0 or not _BASE64_PATTERN.fullmatch(compact):
        return None
    try:
        decoded = base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    return _key_from_json_text(decoded)


def _from_key_shape(text: str) -> str | None:
    if not is_ticket_key(text):
        return None
    # Unpadded base64 JSON is made of key-shape characters too.
    if _from_base64_json(text) is not None:
        return None
    return text


def _from_json(text: str) -> str | None:
    return _key_from_json_text(text)


def _from_embedded_object(text: str) -> str | None:
    match = _EMBEDDED_OBJECT_PATTERN.search(text)
    if match is None:
        return None
    return _key_from_json_text(match.group(0))


def _from_digit_run(text: str) -> str | None:
    match = _DIGIT_RUN_PATTERN.search(text)
    return match.group(0) if match else None


EXTRACTORS: Sequence[Extractor] = (
    _from_key_shape,
    _from_json,
    _from_base64_json,
    _from_embedded_object,
    _from_digit_run,
)


def normalize(raw: Any) -> str | None:
    """Return the ticket key carried by ``raw``, or ``None`` when nothing is extractable.

    Already-decoded JSON (a dict or list) goes straight to the attribute search.
    """

    if raw is None:
        return None
    if isinstance(raw, (dict, list)):
        return find_ticket_key(raw)
    text = str(raw).strip()
    if not text:
        return None
    return first_success(EXTRACTORS, text)


__all__ = [
    "EXTRACTORS",
    "PREFERRED_KEYS",
    "TICKET_KEY_PATTERN",
    "find_ticket_key",
    "first_success",
    "is_ticket_key",
    "normalize",
]
