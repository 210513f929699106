"""Embedded sub-documents shared by several entities."""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from realty_crm.models.property import PropertyType


class Note(BaseModel):
    content: str
    created_by: int | None = None
    created_at: datetime | None = None


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1)


class Document(BaseModel):
    name: str
    url: str
    type: str | None = None
    uploaded_at: datetime | None = None


class DocumentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: str | None = None


class Location(BaseModel):
    city: str | None = None
    state: str | None = None


class Preferences(BaseModel):
    property_types: List[PropertyType] = []
    min_price: float | None = None
    max_price: float | None = None
    min_bedrooms: int | None = None
    min_bathrooms: float | None = None
    min_square_feet: float | None = None
    locations: List[Location] = []


class AgentSummary(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
