"""
Allow-listed updates.

An update body is a raw JSON object. Every key must be in the entity's
allow-list, otherwise nothing is applied and ``InvalidUpdate`` is raised.
"""
import enum
from typing import Any, Dict, FrozenSet, Mapping, Type

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError
from sqlalchemy import inspect

from realty_crm.core.errors import InvalidUpdate, ValidationFailed

PROFILE_UPDATABLE_FIELDS: FrozenSet[str] = frozenset({
    "name", "email", "phone", "company", "profile_image",
})

CLIENT_UPDATABLE_FIELDS: FrozenSet[str] = frozenset({
    "name", "email", "phone", "type", "status", "preferences", "notes", "documents",
})

LEAD_UPDATABLE_FIELDS: FrozenSet[str] = frozenset({
    "name", "email", "phone", "source", "status", "type", "preferences", "notes", "follow_up_date",
})

PROPERTY_UPDATABLE_FIELDS: FrozenSet[str] = frozenset({
    "title", "description", "type", "status", "price", "address", "features", "amenities", "images", "owner",
})

# camelCase names sent by existing clients, mapped to attribute names
FIELD_ALIASES: Dict[str, str] = {
    "followUpDate": "follow_up_date",
    "profileImage": "profile_image",
}


def normalize_fields(updates: Mapping[str, Any]) -> Dict[str, Any]:
    return {FIELD_ALIASES.get(field, field): value for field, value in updates.items()}


def check_allowed_fields(updates: Mapping[str, Any], allowed: FrozenSet[str]) -> None:
    if not set(normalize_fields(updates)).issubset(allowed):
        raise InvalidUpdate()


def to_column_value(value: Any) -> Any:
    """Convert a parsed pydantic value into something a column accepts."""
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (BaseModel, list, dict)):
        return jsonable_encoder(value)
    return value


def column_values(model: BaseModel, **overrides: Any) -> Dict[str, Any]:
    """Column-ready values of a create schema, plus ``overrides``."""
    values = {field: to_column_value(getattr(model, field)) for field in type(model).model_fields}
    values.update(overrides)
    if isinstance(values.get("email"), str):
        values["email"] = values["email"].strip().lower()
    return values


def parse_updates(
    updates: Mapping[str, Any],
    allowed: FrozenSet[str],
    schema: Type[BaseModel],
) -> Dict[str, Any]:
    """Check ``updates`` against ``allowed`` and parse it with ``schema``.

    Only the submitted keys are returned.
    """
    updates = normalize_fields(updates)
    check_allowed_fields(updates, allowed)
    try:
        parsed = schema.model_validate(dict(updates))
    except ValidationError as exc:
        raise ValidationFailed([
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ])
    values = {field: to_column_value(getattr(parsed, field)) for field in updates}
    if isinstance(values.get("email"), str):
        values["email"] = values["email"].strip().lower()
    return values


def current_values(instance: Any) -> Dict[str, Any]:
    """Column values of a loaded entity, keyed by attribute name."""
    mapper = inspect(instance).mapper
    return {attr.key: getattr(instance, attr.key) for attr in mapper.column_attrs}


def apply_updates(instance: Any, values: Mapping[str, Any]) -> None:
    for field, value in values.items():
        setattr(instance, field, value)
