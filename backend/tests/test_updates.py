"""Tests for allow-listed update parsing."""

from datetime import datetime

import pytest

from realty_crm.core.errors import InvalidUpdate, ValidationFailed
from realty_crm.schemas.client import ClientUpdate
from realty_crm.schemas.lead import LeadUpdate
from realty_crm.schemas.property import PropertyUpdate
from realty_crm.services.updates import (
    CLIENT_UPDATABLE_FIELDS,
    LEAD_UPDATABLE_FIELDS,
    PROPERTY_UPDATABLE_FIELDS,
    check_allowed_fields,
    parse_updates,
)


@pytest.mark.unit
def test_unknown_field_rejects_whole_update():
    with pytest.raises(InvalidUpdate) as exc_info:
        check_allowed_fields({"name": "ok", "assigned_agent_id": 2}, CLIENT_UPDATABLE_FIELDS)
    assert exc_info.value.message == "Invalid updates"


@pytest.mark.unit
def test_parse_updates_returns_only_submitted_fields():
    values = parse_updates(
        {"email": "New@Example.COM", "status": "closed"},
        CLIENT_UPDATABLE_FIELDS,
        ClientUpdate,
    )
    assert values == {"email": "new@example.com", "status": "closed"}


@pytest.mark.unit
def test_parse_updates_serializes_nested_values():
    values = parse_updates(
        {"address": {"street": "1 B St", "city": "Y", "state": "Z", "zip_code": "9"}, "amenities": ["pool"]},
        PROPERTY_UPDATABLE_FIELDS,
        PropertyUpdate,
    )
    assert values["address"] == {"street": "1 B St", "city": "Y", "state": "Z", "zip_code": "9", "country": "USA"}
    assert values["amenities"] == ["pool"]


@pytest.mark.unit
def test_parse_updates_bad_value():
    with pytest.raises(ValidationFailed) as exc_info:
        parse_updates({"price": "lots"}, PROPERTY_UPDATABLE_FIELDS, PropertyUpdate)
    assert exc_info.value.violations[0]["field"] == "price"


@pytest.mark.unit
def test_camel_case_wire_names_map_to_attributes():
    check_allowed_fields({"followUpDate": "2026-01-01T00:00:00"}, LEAD_UPDATABLE_FIELDS)

    values = parse_updates({"followUpDate": "2026-01-02T08:00:00"}, LEAD_UPDATABLE_FIELDS, LeadUpdate)
    assert values == {"follow_up_date": datetime(2026, 1, 2, 8, 0)}

    with pytest.raises(InvalidUpdate):
        check_allowed_fields({"followUpDate": None}, CLIENT_UPDATABLE_FIELDS)
