from typing import List, Optional

from realty_crm.models.lead import Lead
from realty_crm.repositories.base import Repository


class LeadRepository(Repository[Lead]):
    model = Lead
    label = "Lead"

    def search(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        source: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
    ) -> List[Lead]:
        query = self.db.query(Lead)
        if name:
            query = query.filter(Lead.name.ilike(f"%{name}%"))
        if email:
            query = query.filter(Lead.email.ilike(f"%{email}%"))
        if source:
            query = query.filter(Lead.source == source)
        if status:
            query = query.filter(Lead.status == status)
        if type:
            query = query.filter(Lead.type == type)
        return self._newest_first(query).all()
