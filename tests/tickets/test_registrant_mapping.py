from __future__ import annotations

import json
from datetime import datetime, timezone

from ticketgate_api.domain.tickets import EventContext
from ticketgate_api.domain.tickets.badge import BadgeOptions, BadgeView, badge_filename
from ticketgate_api.domain.tickets.columns import ticket_columns
from ticketgate_api.domain.tickets.payload import normalize
from ticketgate_api.domain.tickets.qr_payload import build_qr_payload, encode_qr_payload
from ticketgate_api.domain.tickets.registrant import RegistrantRecord, record_from_row


def test_ticket_columns_match_known_identifier_names():
    names = ["id", "ticket_code", "TicketId", "ticketno", "code", "C", "name", "promo_code", "ticket_codes", ""]

    assert ticket_columns(names) == frozenset({"ticket_code", "TicketId", "ticketno", "code", "C"})


def test_ticket_columns_empty_when_nothing_matches():
    assert ticket_columns(["id", "name", "email"]) == frozenset()


def test_canonical_ticket_row_keeps_its_entity_reference():
    row = {
        "id": 9,
        "ticket_code": "TKT-1",
        "code": None,
        "entity_type": "speaker",
        "entity_id": "41",
        "name": "Asha Rao",
        "email": "asha@example.com",
        "company": "Metro Rail",
        "category": "Delegate",
        "payment_status": "paid",
        "transaction_id": "tx-1",
    }

    record = record_from_row(row, collection="tickets", ticket_key="TKT-1", canonical=True)

    assert record.entity_type == "speaker"
    assert record.entity_id == "41"
    assert record.category == "Delegate"
    assert record.transaction_id == "tx-1"
    assert record.collection == "tickets"


def test_role_row_maps_synonym_columns():
    row = {
        "id": 7,
        "full_name": "Ravi Menon",
        "organization": "Signal Works",
        "ticket_code": "SPK-7",
        "ticket_category": "Speaker",
        "payment_status": "completed",
        "txId": "pay_123",
    }

    record = record_from_row(row, collection="speakers", ticket_key="SPK-7", canonical=False)

    assert record.entity_type == "speaker"
    assert record.entity_id == "7"
    assert record.name == "Ravi Menon"
    assert record.company == "Signal Works"
    assert record.category == "Speaker"
    assert record.transaction_id == "pay_123"


def test_partner_status_doubles_as_payment_status():
    row = {"id": 3, "name": "Partner Co", "org": "Rolling Stock", "code": "PRT-3", "category": "Partner", "status": "paid"}

    record = record_from_row(row, collection="partners", ticket_key="PRT-3", canonical=False)

    assert record.ticket_code == "PRT-3"
    assert record.company == "Rolling Stock"
    assert record.payment_status == "paid"


def test_ticket_code_falls_back_to_matched_key():
    record = record_from_row({"id": 1, "c": "  "}, collection="visitors", ticket_key="K-1", canonical=False)

    assert record.ticket_code == "K-1"
    assert record.name is None


def test_badge_view_and_options_payloads():
    record = RegistrantRecord(ticket_code="T 1/2", collection="tickets", name="A", company="B", category="VIP")
    event = EventContext(name="RailTrans Expo", date="2026-10-19", venue="Hall 4")

    view = BadgeView.from_record(record)
    options = BadgeOptions(event=event, qr_payload={"c": "T 1/2"})

    assert view.as_payload() == {"ticket_code": "T 1/2", "name": "A", "company": "B", "category": "VIP"}
    assert options.as_payload() == {
        "includeQRCode": True,
        "qrPayload": {"c": "T 1/2"},
        "event": {"name": "RailTrans Expo", "date": "2026-10-19", "venue": "Hall 4"},
    }
    assert badge_filename("T 1/2") == "ticket-T_1_2.pdf"


def test_qr_payload_uses_compact_keys_and_scans_back_to_ticket():
    record = RegistrantRecord(
        ticket_code="VIS-42",
        collection="visitors",
        name="Meera",
        email="meera@example.com",
        company="Freight Ltd",
        category="General",
    )
    issued_at = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)

    payload = build_qr_payload(
        record,
        event=EventContext(name="RailTrans Expo", date="2026-10-19", venue="Hall 4"),
        phone="+91 90000 00000",
        slots=["day-1"],
        issued_at=issued_at,
    )
    encoded = encode_qr_payload(payload)

    assert payload["c"] == "VIS-42"
    assert payload["ts"] == int(issued_at.timestamp() * 1000)
    assert payload["ev"] == {"n": "RailTrans Expo", "d": "2026-10-19", "v": "Hall 4"}
    assert encoded.startswith('{"c":"VIS-42","n":"Meera",')
    assert json.loads(encoded) == payload
    assert normalize(encoded) == "VIS-42"
