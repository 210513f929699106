import logging
from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.errors import ResourceInUse
from realty_crm.core.permissions import ensure_owner_or_admin, is_agent_or_admin, require_permission
from realty_crm.models.client import Client, ClientStatus, ClientType
from realty_crm.models.user import User
from realty_crm.repositories.clients import ClientRepository
from realty_crm.repositories.properties import PropertyRepository
from realty_crm.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from realty_crm.schemas.common import DocumentCreate, MessageResponse, NoteCreate
from realty_crm.services.behaviors import append_document, append_note, link_property
from realty_crm.services.updates import (
    CLIENT_UPDATABLE_FIELDS,
    apply_updates,
    check_allowed_fields,
    column_values,
    current_values,
    parse_updates,
)
from realty_crm.services.validation import ensure_valid, validate_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


def _owned_client(clients: ClientRepository, client_id: int, user: User, action: str) -> Client:
    client = clients.get_or_404(client_id)
    ensure_owner_or_admin(client, user, f"Not authorized to {action} this client")
    return client


@router.get("", response_model=List[ClientResponse])
def get_clients(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    """All clients, newest first"""
    return ClientRepository(db).list_all()


@router.get("/search", response_model=List[ClientResponse])
def search_clients(
    name: str | None = Query(None, description="Case-insensitive substring of the name"),
    email: str | None = Query(None, description="Case-insensitive substring of the email"),
    type: ClientType | None = Query(None),
    status_filter: ClientStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    """Filter clients; all filters optional, combined with AND"""
    return ClientRepository(db).search(
        name=name,
        email=email,
        type=type.value if type else None,
        status=status_filter.value if status_filter else None,
    )


@router.get("/agent", response_model=List[ClientResponse])
def get_agent_clients(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_agent_or_admin),
):
    """Clients assigned to the current agent"""
    return ClientRepository(db).list_by_owner(current_user.id)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.read")),
):
    """Client details"""
    return ClientRepository(db).get_or_404(client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Create a client assigned to the current agent"""
    values = column_values(client_data, assigned_agent_id=current_user.id)
    ensure_valid(validate_client(values))
    return ClientRepository(db).create(Client(**values))


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int,
    updates: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Update a client (assigned agent or admin)"""
    check_allowed_fields(updates, CLIENT_UPDATABLE_FIELDS)

    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "update")

    values = parse_updates(updates, CLIENT_UPDATABLE_FIELDS, ClientUpdate)
    ensure_valid(validate_client({**current_values(client), **values}))

    apply_updates(client, values)
    clients.commit(client)
    return client


@router.delete("/{client_id}", response_model=MessageResponse)
def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Delete a client (assigned agent or admin)"""
    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "delete")
    # A converted lead must keep pointing at its client
    if client.converted_leads:
        raise ResourceInUse("Cannot delete a client created from a converted lead")

    clients.delete(client)
    logger.info("Client deleted", extra={"client_id": client_id, "user_id": current_user.id})
    return {"message": "Client deleted successfully"}


@router.post("/{client_id}/notes", response_model=ClientResponse)
def add_client_note(
    client_id: int,
    note: NoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Append a note"""
    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "add notes to")

    client.notes = append_note(client.notes, note.content, current_user.id)
    clients.commit(client)
    return client


@router.post("/{client_id}/documents", response_model=ClientResponse)
def add_client_document(
    client_id: int,
    document: DocumentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Attach a document descriptor"""
    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "add documents to")

    client.documents = append_document(client.documents, document.name, document.url, document.type)
    clients.commit(client)
    return client


@router.post("/{client_id}/contact", response_model=ClientResponse)
def record_client_contact(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Stamp the last contact time"""
    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "update")

    client.last_contact = datetime.utcnow()
    clients.commit(client)
    return client


@router.post("/{client_id}/properties/{property_id}", response_model=ClientResponse)
def link_client_property(
    client_id: int,
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("clients.write")),
):
    """Link a listing to the client (no duplicates)"""
    clients = ClientRepository(db)
    client = _owned_client(clients, client_id, current_user, "update")
    prop = PropertyRepository(db).get_or_404(property_id)

    client.properties = link_property(client.properties, prop)
    clients.commit(client)
    return client
