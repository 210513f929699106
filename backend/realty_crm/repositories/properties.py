from typing import List

from realty_crm.models.property import Property
from realty_crm.repositories.base import Repository
from realty_crm.schemas.property import PropertySearchParams


class PropertyRepository(Repository[Property]):
    model = Property
    label = "Property"
    owner_column = "agent_id"

    def search(self, params: PropertySearchParams) -> List[Property]:
        """Filter listings; every given parameter narrows the result (AND).

        Price bounds and the bedroom/bathroom minimums are inclusive.
        """
        query = self.db.query(Property)
        if params.type:
            query = query.filter(Property.type == params.type.value)
        if params.status:
            query = query.filter(Property.status == params.status.value)
        if params.city:
            query = query.filter(Property.address["city"].as_string().ilike(f"%{params.city}%"))
        if params.state:
            query = query.filter(Property.address["state"].as_string().ilike(f"%{params.state}%"))
        if params.min_price is not None:
            query = query.filter(Property.price >= params.min_price)
        if params.max_price is not None:
            query = query.filter(Property.price <= params.max_price)
        if params.bedrooms is not None:
            query = query.filter(Property.features["bedrooms"].as_float() >= params.bedrooms)
        if params.bathrooms is not None:
            query = query.filter(Property.features["bathrooms"].as_float() >= params.bathrooms)
        return self._newest_first(query).all()
