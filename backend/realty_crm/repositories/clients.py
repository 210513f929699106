from typing import List, Optional

from realty_crm.models.client import Client
from realty_crm.repositories.base import Repository


class ClientRepository(Repository[Client]):
    model = Client
    label = "Client"
    duplicate_message = "Client with this email already exists"

    def search(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Client]:
        query = self.db.query(Client)
        if name:
            query = query.filter(Client.name.ilike(f"%{name}%"))
        if email:
            query = query.filter(Client.email.ilike(f"%{email}%"))
        if type:
            query = query.filter(Client.type == type)
        if status:
            query = query.filter(Client.status == status)
        return self._newest_first(query).all()
