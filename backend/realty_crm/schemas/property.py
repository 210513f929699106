from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from realty_crm.models.property import PropertyType, PropertyStatus
from realty_crm.schemas.common import AgentSummary


class Address(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "USA"


class Features(BaseModel):
    bedrooms: int | None = None
    bathrooms: float | None = None
    square_feet: float | None = None
    lot_size: float | None = None
    year_built: int | None = None
    parking: int | None = None


class Image(BaseModel):
    url: str
    caption: str | None = None


class OwnerContact(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class PropertyBase(BaseModel):
    title: str
    description: str
    type: PropertyType
    status: PropertyStatus = PropertyStatus.AVAILABLE
    price: float
    address: Address
    features: Features | None = None
    amenities: List[str] = []
    images: List[Image] = []
    owner: OwnerContact | None = None


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    type: PropertyType | None = None
    status: PropertyStatus | None = None
    price: float | None = None
    address: Address | None = None
    features: Features | None = None
    amenities: List[str] | None = None
    images: List[Image] | None = None
    owner: OwnerContact | None = None


class PropertyResponse(PropertyBase):
    id: int
    agent_id: int
    agent: AgentSummary | None = None
    views: int = 0
    favorites: int = 0
    full_address: str | None = None
    listing_date: datetime | None = None
    last_updated: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PropertySearchParams(BaseModel):
    type: PropertyType | None = None
    status: PropertyStatus | None = None
    city: str | None = None
    state: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: float | None = Field(None, ge=0)
