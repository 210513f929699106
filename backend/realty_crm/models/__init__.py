from realty_crm.models.user import User, UserRole
from realty_crm.models.client import Client, ClientType, ClientStatus, ClientSource, client_properties
from realty_crm.models.lead import Lead, LeadStatus, LeadSource
from realty_crm.models.property import Property, PropertyType, PropertyStatus

__all__ = [
    "User",
    "UserRole",
    "Client",
    "ClientType",
    "ClientStatus",
    "ClientSource",
    "client_properties",
    "Lead",
    "LeadStatus",
    "LeadSource",
    "Property",
    "PropertyType",
    "PropertyStatus",
]
