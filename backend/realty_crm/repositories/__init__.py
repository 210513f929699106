from realty_crm.repositories.users import UserRepository
from realty_crm.repositories.clients import ClientRepository
from realty_crm.repositories.leads import LeadRepository
from realty_crm.repositories.properties import PropertyRepository

__all__ = [
    "UserRepository",
    "ClientRepository",
    "LeadRepository",
    "PropertyRepository",
]
