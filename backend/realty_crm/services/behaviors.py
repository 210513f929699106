"""
Entity behaviors as pure functions.

Each function takes the current value(s) and returns the new value; the
caller assigns the result to the entity and commits. Embedded lists are
always rebuilt so that SQLAlchemy sees a new JSON value.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from realty_crm.models.client import ClientSource
from realty_crm.models.lead import LeadStatus

CLIENT_SOURCES = {source.value for source in ClientSource}

# Fields copied from a lead onto the client created by conversion
CONVERSION_FIELDS = ("name", "email", "phone", "type", "preferences", "source")


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.utcnow()


def append_note(
    notes: Optional[List[dict]],
    content: str,
    created_by: int,
    now: Optional[datetime] = None,
) -> List[dict]:
    """Return ``notes`` with a new note appended."""
    note = {
        "content": content,
        "created_by": created_by,
        "created_at": _now(now).isoformat(),
    }
    return [*(notes or []), note]


def append_document(
    documents: Optional[List[dict]],
    name: str,
    url: str,
    doc_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[dict]:
    """Return ``documents`` with a new document descriptor appended."""
    document = {
        "name": name,
        "url": url,
        "type": doc_type,
        "uploaded_at": _now(now).isoformat(),
    }
    return [*(documents or []), document]


def increment_counter(value: Optional[int]) -> int:
    """Next value of a views/favorites counter; never below 1."""
    return max(value or 0, 0) + 1


def link_property(properties: List[Any], prop: Any) -> List[Any]:
    """Return ``properties`` with ``prop`` added unless it is already linked."""
    if any(existing.id == prop.id for existing in properties):
        return list(properties)
    return [*properties, prop]


def client_fields_from_lead(lead: Any) -> Dict[str, Any]:
    """Column values for the client created from ``lead``.

    Lead sources that clients do not know (zillow, realtor) become "other".
    """
    fields = {name: getattr(lead, name) for name in CONVERSION_FIELDS}
    if fields["source"] not in CLIENT_SOURCES:
        fields["source"] = ClientSource.OTHER.value
    fields["assigned_agent_id"] = lead.assigned_agent_id
    return fields


def converted_lead_fields(client_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Column values that mark a lead as converted into ``client_id``."""
    return {
        "status": LeadStatus.CONVERTED.value,
        "conversion_date": _now(now),
        "converted_to_id": client_id,
    }
