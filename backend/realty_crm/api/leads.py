import logging
from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.permissions import ensure_owner_or_admin, is_agent_or_admin, require_permission
from realty_crm.models.client import ClientType
from realty_crm.models.lead import Lead, LeadSource, LeadStatus
from realty_crm.models.user import User
from realty_crm.repositories.clients import ClientRepository
from realty_crm.repositories.leads import LeadRepository
from realty_crm.schemas.client import ClientResponse
from realty_crm.schemas.common import MessageResponse, NoteCreate
from realty_crm.schemas.lead import (
    FollowUpRequest,
    LeadConversionResponse,
    LeadCreate,
    LeadResponse,
    LeadUpdate,
)
from realty_crm.services.behaviors import append_note
from realty_crm.services.conversion import convert_lead
from realty_crm.services.updates import (
    LEAD_UPDATABLE_FIELDS,
    apply_updates,
    check_allowed_fields,
    column_values,
    current_values,
    parse_updates,
)
from realty_crm.services.validation import ensure_valid, validate_lead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["leads"])


def _owned_lead(leads: LeadRepository, lead_id: int, user: User, action: str) -> Lead:
    lead = leads.get_or_404(lead_id)
    ensure_owner_or_admin(lead, user, f"Not authorized to {action} this lead")
    return lead


@router.get("", response_model=List[LeadResponse])
def get_leads(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.read")),
):
    """All leads, newest first"""
    return LeadRepository(db).list_all()


@router.get("/search", response_model=List[LeadResponse])
def search_leads(
    name: str | None = Query(None, description="Case-insensitive substring of the name"),
    email: str | None = Query(None, description="Case-insensitive substring of the email"),
    source: LeadSource | None = Query(None),
    status_filter: LeadStatus | None = Query(None, alias="status"),
    type: ClientType | None = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.read")),
):
    """Filter leads; all filters optional, combined with AND"""
    return LeadRepository(db).search(
        name=name,
        email=email,
        source=source.value if source else None,
        status=status_filter.value if status_filter else None,
        type=type.value if type else None,
    )


@router.get("/agent", response_model=List[LeadResponse])
def get_agent_leads(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_agent_or_admin),
):
    """Leads assigned to the current agent"""
    return LeadRepository(db).list_by_owner(current_user.id)


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.read")),
):
    """Lead details"""
    return LeadRepository(db).get_or_404(lead_id)


@router.post("", response_model=LeadResponse, status_code=status.HTTP_201_CREATED)
def create_lead(
    lead_data: LeadCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Create a lead assigned to the current agent"""
    values = column_values(lead_data, assigned_agent_id=current_user.id)
    ensure_valid(validate_lead(values))
    return LeadRepository(db).create(Lead(**values))


@router.put("/{lead_id}", response_model=LeadResponse)
def update_lead(
    lead_id: int,
    updates: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Update a lead (assigned agent or admin). Conversion has its own endpoint."""
    check_allowed_fields(updates, LEAD_UPDATABLE_FIELDS)

    leads = LeadRepository(db)
    lead = _owned_lead(leads, lead_id, current_user, "update")

    values = parse_updates(updates, LEAD_UPDATABLE_FIELDS, LeadUpdate)
    ensure_valid(validate_lead({**current_values(lead), **values}, previous_status=lead.status))

    apply_updates(lead, values)
    leads.commit(lead)
    return lead


@router.delete("/{lead_id}", response_model=MessageResponse)
def delete_lead(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Delete a lead (assigned agent or admin)"""
    leads = LeadRepository(db)
    lead = _owned_lead(leads, lead_id, current_user, "delete")

    leads.delete(lead)
    logger.info("Lead deleted", extra={"lead_id": lead_id, "user_id": current_user.id})
    return {"message": "Lead deleted successfully"}


@router.post("/{lead_id}/notes", response_model=LeadResponse)
def add_lead_note(
    lead_id: int,
    note: NoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Append a note"""
    leads = LeadRepository(db)
    lead = _owned_lead(leads, lead_id, current_user, "add notes to")

    lead.notes = append_note(lead.notes, note.content, current_user.id)
    leads.commit(lead)
    return lead


@router.post("/{lead_id}/contact", response_model=LeadResponse)
def record_lead_contact(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Stamp the last contact time"""
    leads = LeadRepository(db)
    lead = _owned_lead(leads, lead_id, current_user, "update")

    lead.last_contact = datetime.utcnow()
    leads.commit(lead)
    return lead


@router.post("/{lead_id}/follow-up", response_model=LeadResponse)
def schedule_follow_up(
    lead_id: int,
    follow_up: FollowUpRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.write")),
):
    """Schedule the next follow-up"""
    leads = LeadRepository(db)
    lead = _owned_lead(leads, lead_id, current_user, "update")

    lead.follow_up_date = follow_up.follow_up_date
    leads.commit(lead)
    return lead


@router.post("/{lead_id}/convert", response_model=LeadConversionResponse)
def convert_lead_to_client(
    lead_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("leads.convert")),
):
    """Create a client from the lead and mark the lead converted"""
    lead, client = convert_lead(LeadRepository(db), ClientRepository(db), lead_id, current_user)
    return LeadConversionResponse(
        lead=LeadResponse.model_validate(lead),
        client=ClientResponse.model_validate(client),
    )
