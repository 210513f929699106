from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import List
from realty_crm.models.client import ClientType, ClientStatus, ClientSource
from realty_crm.schemas.common import Note, Document, Preferences, AgentSummary


class ClientBase(BaseModel):
    name: str
    email: EmailStr
    phone: str | None = None
    type: ClientType
    status: ClientStatus = ClientStatus.ACTIVE
    source: ClientSource = ClientSource.WEBSITE
    preferences: Preferences | None = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    type: ClientType | None = None
    status: ClientStatus | None = None
    preferences: Preferences | None = None
    notes: List[Note] | None = None
    documents: List[Document] | None = None


class ClientResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    type: ClientType
    status: ClientStatus
    source: ClientSource
    preferences: Preferences | None = None
    notes: List[Note] = []
    documents: List[Document] = []
    assigned_agent_id: int
    assigned_agent: AgentSummary | None = None
    property_ids: List[int] = []
    last_contact: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
