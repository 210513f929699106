"""
Lead to client conversion.

The new client and the converted lead are written in one transaction: the
client is flushed to get its id, the lead is marked, then both are committed
together. A failure at any point (e.g. a client with the same email already
exists) rolls back both writes.
"""
import logging
from typing import Tuple

from realty_crm.core.permissions import ensure_owner_or_admin
from realty_crm.models.client import Client
from realty_crm.models.lead import Lead
from realty_crm.models.user import User
from realty_crm.repositories.clients import ClientRepository
from realty_crm.repositories.leads import LeadRepository
from realty_crm.services.behaviors import client_fields_from_lead, converted_lead_fields
from realty_crm.services.updates import apply_updates, current_values
from realty_crm.services.validation import ensure_valid, validate_client, validate_lead

logger = logging.getLogger(__name__)


def convert_lead(
    leads: LeadRepository,
    clients: ClientRepository,
    lead_id: int,
    current_user: User,
) -> Tuple[Lead, Client]:
    lead = leads.get_or_404(lead_id)
    ensure_owner_or_admin(lead, current_user, "Not authorized to convert this lead")

    client_values = client_fields_from_lead(lead)
    ensure_valid(validate_client({**client_values, "status": "active"}))
    client = clients.add(Client(**client_values))

    lead_values = converted_lead_fields(client.id)
    ensure_valid(validate_lead({**current_values(lead), **lead_values}))
    apply_updates(lead, lead_values)

    clients.commit(client, lead)
    logger.info(
        "Lead converted",
        extra={"lead_id": lead.id, "client_id": client.id, "user_id": current_user.id},
    )
    return lead, client
