"""
Per-entity validation.

Every ``validate_*`` function takes the column values an entity would have
after the write and returns a list of violations (``{"field", "message"}``).
An empty list means the entity may be persisted.
"""
from typing import Any, Iterable, List, Mapping, Optional

from realty_crm.core.errors import ValidationFailed
from realty_crm.models.client import ClientType, ClientStatus, ClientSource
from realty_crm.models.lead import LeadStatus, LeadSource
from realty_crm.models.property import PropertyType, PropertyStatus
from realty_crm.models.user import UserRole

ADDRESS_FIELDS = ("street", "city", "state", "zip_code", "country")
NON_NEGATIVE_FEATURES = ("bedrooms", "bathrooms", "square_feet", "lot_size", "year_built", "parking")
NON_NEGATIVE_PREFERENCES = ("min_price", "max_price", "min_bedrooms", "min_bathrooms", "min_square_feet")


def _violation(field: str, message: str) -> dict:
    return {"field": field, "message": message}


def _value(value: Any) -> Any:
    return getattr(value, "value", value)


def _required(data: Mapping[str, Any], fields: Iterable[str], prefix: str = "") -> List[dict]:
    violations = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            violations.append(_violation(prefix + field, "is required"))
    return violations


def _enum(data: Mapping[str, Any], field: str, allowed: Iterable[str], required: bool = True) -> List[dict]:
    value = _value(data.get(field))
    if value is None:
        return [_violation(field, "is required")] if required else []
    allowed = list(allowed)
    if value not in allowed:
        return [_violation(field, f"must be one of: {', '.join(allowed)}")]
    return []


def _non_negative(data: Optional[Mapping[str, Any]], fields: Iterable[str], prefix: str = "") -> List[dict]:
    violations = []
    for field in fields:
        value = (data or {}).get(field)
        if value is not None and value < 0:
            violations.append(_violation(prefix + field, "must be >= 0"))
    return violations


def _preferences(preferences: Optional[Mapping[str, Any]]) -> List[dict]:
    if not preferences:
        return []
    violations = _non_negative(preferences, NON_NEGATIVE_PREFERENCES, prefix="preferences.")
    min_price = preferences.get("min_price")
    max_price = preferences.get("max_price")
    if min_price is not None and max_price is not None and min_price > max_price:
        violations.append(_violation("preferences.max_price", "must be >= min_price"))
    for property_type in preferences.get("property_types") or []:
        if _value(property_type) not in [t.value for t in PropertyType]:
            violations.append(_violation("preferences.property_types", f"unknown property type {property_type}"))
    return violations


def validate_user(data: Mapping[str, Any]) -> List[dict]:
    violations = _required(data, ("name", "email", "hashed_password"))
    violations += _enum(data, "role", [r.value for r in UserRole])
    return violations


def validate_client(data: Mapping[str, Any]) -> List[dict]:
    violations = _required(data, ("name", "email", "assigned_agent_id"))
    violations += _enum(data, "type", [t.value for t in ClientType])
    violations += _enum(data, "status", [s.value for s in ClientStatus])
    violations += _enum(data, "source", [s.value for s in ClientSource])
    violations += _preferences(data.get("preferences"))
    return violations


def validate_lead(data: Mapping[str, Any], previous_status: Optional[str] = None) -> List[dict]:
    """Lead rules, including the conversion invariants.

    ``previous_status`` is the stored status for updates; ``converted`` is
    terminal and can only be reached through conversion.
    """
    violations = _required(data, ("name", "email"))
    violations += _enum(data, "source", [s.value for s in LeadSource])
    violations += _enum(data, "status", [s.value for s in LeadStatus])
    violations += _enum(data, "type", [t.value for t in ClientType])
    violations += _preferences(data.get("preferences"))

    status = _value(data.get("status"))
    if status == LeadStatus.CONVERTED.value:
        if data.get("converted_to_id") is None:
            violations.append(_violation("converted_to", "is required for a converted lead"))
        if data.get("conversion_date") is None:
            violations.append(_violation("conversion_date", "is required for a converted lead"))
    if previous_status == LeadStatus.CONVERTED.value and status != LeadStatus.CONVERTED.value:
        violations.append(_violation("status", "a converted lead cannot change status"))
    return violations


def validate_property(data: Mapping[str, Any]) -> List[dict]:
    violations = _required(data, ("title", "description", "price", "address", "agent_id"))
    violations += _enum(data, "type", [t.value for t in PropertyType])
    violations += _enum(data, "status", [s.value for s in PropertyStatus])
    violations += _non_negative(data, ("price",))
    if data.get("address"):
        violations += _required(data["address"], ADDRESS_FIELDS, prefix="address.")
    violations += _non_negative(data.get("features"), NON_NEGATIVE_FEATURES, prefix="features.")
    return violations


def ensure_valid(violations: List[dict]) -> None:
    """Raise ``ValidationFailed`` when ``violations`` is not empty."""
    if violations:
        raise ValidationFailed(violations)
