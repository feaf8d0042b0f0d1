from __future__ import annotations

import base64
import json

import pytest

from ticketgate_api.domain.tickets.payload import find_ticket_key, first_success, is_ticket_key, normalize


@pytest.mark.parametrize(
    "key",
    ["AB12-xyz.9", "abc", "T_500", "0001", "visitor.2026.A", "X" * 64],
)
def test_valid_key_shapes_are_returned_verbatim(key):
    assert normalize(key) == key


def test_key_is_trimmed_before_matching():
    assert normalize("  AB12-xyz.9 \n") == "AB12-xyz.9"


@pytest.mark.parametrize("raw", [None, "", "   ", "ab", "hello world"])
def test_unextractable_payloads_return_none(raw):
    assert normalize(raw) is None


def test_numeric_input_is_stringified():
    assert normalize(12345) == "12345"


def test_json_object_uses_ticket_attribute():
    assert normalize('{"ticketId":"T-500"}') == "T-500"


def test_json_preference_order_wins_over_generic_id():
    assert normalize('{"id": "ID-1", "ticket_code": "TC-1"}') == "TC-1"


def test_blank_preferred_values_are_skipped():
    assert normalize('{"ticket_code": "  ", "code": "C-2"}') == "C-2"


def test_numeric_json_values_are_accepted():
    assert normalize('{"ticket_id": 48213}') == "48213"


def test_nested_objects_are_searched_depth_first():
    payload = json.dumps({"data": {"attendee": {"ticketCode": "N-77"}}})
    assert normalize(payload) == "N-77"


def test_arrays_of_objects_are_searched():
    payload = json.dumps({"items": [{"name": "x"}, {"code": "ARR-1"}]})
    assert normalize(payload) == "ARR-1"


def test_top_level_preferred_key_beats_nested_one():
    payload = json.dumps({"meta": {"ticket_code": "NESTED"}, "code": "TOP"})
    assert normalize(payload) == "TOP"


def test_padded_base64_json_is_decoded():
    encoded = base64.b64encode(b'{"c":"Q9921"}').decode()
    assert normalize(encoded) == "Q9921"


def test_unpadded_base64_json_is_not_mistaken_for_a_key():
    encoded = base64.b64encode(b'{"ticket_code":"ABC"}').decode()
    assert encoded == "eyJ0aWNrZXRfY29kZSI6IkFCQyJ9"
    assert is_ticket_key(encoded)
    assert normalize(encoded) == "ABC"


def test_json_embedded_in_noise_is_extracted():
    assert normalize('scan: {"ticket_code": "VIS-9"} at 20261019') == "VIS-9"


def test_embedded_json_spanning_lines_is_extracted():
    assert normalize('prefix\n{\n  "ticketNo": "ML-3"\n}\nsuffix') == "ML-3"


def test_ticket_key_with_digits_and_dashes_is_not_reduced_to_digits():
    assert normalize("order-8675309-confirmed") == "order-8675309-confirmed"


def test_digit_fallback_returns_first_run():
    assert normalize("order #8675309 confirmed") == "8675309"


def test_digit_fallback_skips_short_runs():
    assert normalize("call 12 then 5551234 or 987654") == "5551234"


def test_digit_fallback_caps_run_at_twelve_digits():
    assert normalize("#123456789012345") == "123456789012"


def test_unparseable_braces_fall_through_to_digits():
    assert normalize("{not json} 123456") == "123456"


def test_find_ticket_key_ignores_scalars():
    assert find_ticket_key("T-1") is None
    assert find_ticket_key(42) is None


def test_first_success_stops_at_first_result():
    calls = []

    def first(value):
        calls.append("first")
        return None

    def second(value):
        calls.append("second")
        return value.upper()

    def third(value):
        calls.append("third")
        return "unused"

    assert first_success([first, second, third], "abc") == "ABC"
    assert calls == ["first", "second"]


def test_decoded_json_values_are_searched_directly():
    assert normalize({"ticketCode": "OBJ-1"}) == "OBJ-1"
    assert normalize([{"name": "x"}, {"c": "ARR-2"}]) == "ARR-2"
    assert normalize({"name": "no key"}) is None
    assert normalize(["plain", "strings"]) is None


def test_key_shaped_base64_without_ticket_attribute_stays_verbatim():
    encoded = base64.b64encode(b'{"name":"x"}').decode()

    assert encoded == "eyJuYW1lIjoieCJ9"
    assert normalize(encoded) == encoded
