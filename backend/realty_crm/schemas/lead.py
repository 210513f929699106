from pydantic import AliasChoices, BaseModel, EmailStr, Field
from datetime import datetime
from typing import List
from realty_crm.models.lead import LeadStatus, LeadSource
from realty_crm.models.client import ClientType
from realty_crm.schemas.common import Note, Preferences, AgentSummary
from realty_crm.schemas.client import ClientResponse


class LeadBase(BaseModel):
    name: str
    email: EmailStr
    phone: str | None = None
    source: LeadSource
    status: LeadStatus = LeadStatus.NEW
    type: ClientType
    preferences: Preferences | None = None
    follow_up_date: datetime | None = None


class LeadCreate(LeadBase):
    pass


class LeadUpdate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    source: LeadSource | None = None
    status: LeadStatus | None = None
    type: ClientType | None = None
    preferences: Preferences | None = None
    notes: List[Note] | None = None
    follow_up_date: datetime | None = None


class FollowUpRequest(BaseModel):
    follow_up_date: datetime = Field(validation_alias=AliasChoices("follow_up_date", "followUpDate"))


class LeadResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    source: LeadSource
    status: LeadStatus
    type: ClientType
    preferences: Preferences | None = None
    notes: List[Note] = []
    assigned_agent_id: int | None = None
    assigned_agent: AgentSummary | None = None
    follow_up_date: datetime | None = None
    last_contact: datetime | None = None
    conversion_date: datetime | None = None
    converted_to: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class LeadConversionResponse(BaseModel):
    lead: LeadResponse
    client: ClientResponse
