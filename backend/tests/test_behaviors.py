"""Tests for the pure entity behaviors."""

from datetime import datetime
from types import SimpleNamespace

import pytest

from realty_crm.services.behaviors import (
    append_document,
    append_note,
    client_fields_from_lead,
    converted_lead_fields,
    increment_counter,
    link_property,
)

NOW = datetime(2026, 5, 1, 9, 30)


@pytest.mark.unit
def test_append_note_returns_new_list():
    notes = [{"content": "first", "created_by": 1, "created_at": "2026-01-01T00:00:00"}]

    result = append_note(notes, "second", 2, now=NOW)

    assert len(notes) == 1
    assert result[0] == notes[0]
    assert result[1] == {"content": "second", "created_by": 2, "created_at": "2026-05-01T09:30:00"}


@pytest.mark.unit
def test_append_note_to_empty():
    assert append_note(None, "hello", 3, now=NOW)[0]["content"] == "hello"


@pytest.mark.unit
def test_append_document():
    result = append_document([], "Contract", "https://files.example.com/c.pdf", "pdf", now=NOW)

    assert result == [{
        "name": "Contract",
        "url": "https://files.example.com/c.pdf",
        "type": "pdf",
        "uploaded_at": "2026-05-01T09:30:00",
    }]


@pytest.mark.unit
@pytest.mark.parametrize("current,expected", [(None, 1), (0, 1), (5, 6), (-3, 1)])
def test_increment_counter_never_negative(current, expected):
    assert increment_counter(current) == expected


@pytest.mark.unit
def test_link_property_skips_duplicates():
    first = SimpleNamespace(id=1)
    second = SimpleNamespace(id=2)

    linked = link_property([first], second)
    assert [p.id for p in linked] == [1, 2]
    assert [p.id for p in link_property(linked, SimpleNamespace(id=2))] == [1, 2]


@pytest.mark.unit
def test_client_fields_from_lead():
    lead = SimpleNamespace(
        name="Larry",
        email="larry@example.com",
        phone="555",
        type="buyer",
        preferences={"min_price": 1},
        source="referral",
        assigned_agent_id=9,
        status="qualified",
    )

    fields = client_fields_from_lead(lead)

    assert fields == {
        "name": "Larry",
        "email": "larry@example.com",
        "phone": "555",
        "type": "buyer",
        "preferences": {"min_price": 1},
        "source": "referral",
        "assigned_agent_id": 9,
    }


@pytest.mark.unit
def test_client_fields_from_lead_maps_unknown_source():
    lead = SimpleNamespace(
        name="Z", email="z@example.com", phone=None, type="seller",
        preferences=None, source="zillow", assigned_agent_id=1,
    )
    assert client_fields_from_lead(lead)["source"] == "other"


@pytest.mark.unit
def test_converted_lead_fields():
    assert converted_lead_fields(12, now=NOW) == {
        "status": "converted",
        "conversion_date": NOW,
        "converted_to_id": 12,
    }
