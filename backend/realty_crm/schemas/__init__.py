from realty_crm.schemas.user import (
    UserCreate, UserResponse, LoginRequest, ProfileUpdate, PasswordChange, AuthResponse,
)
from realty_crm.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from realty_crm.schemas.lead import LeadCreate, LeadUpdate, LeadResponse, LeadConversionResponse
from realty_crm.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "ProfileUpdate",
    "PasswordChange",
    "AuthResponse",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "LeadCreate",
    "LeadUpdate",
    "LeadResponse",
    "LeadConversionResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
]
