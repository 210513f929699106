import logging
from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.permissions import ensure_owner_or_admin, is_agent, require_permission
from realty_crm.models.property import Property, PropertyStatus, PropertyType
from realty_crm.models.user import User
from realty_crm.repositories.properties import PropertyRepository
from realty_crm.schemas.common import MessageResponse
from realty_crm.schemas.property import (
    PropertyCreate,
    PropertyResponse,
    PropertySearchParams,
    PropertyUpdate,
)
from realty_crm.services.behaviors import increment_counter
from realty_crm.services.updates import (
    PROPERTY_UPDATABLE_FIELDS,
    apply_updates,
    check_allowed_fields,
    column_values,
    current_values,
    parse_updates,
)
from realty_crm.services.validation import ensure_valid, validate_property

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=List[PropertyResponse])
def get_properties(db: Session = Depends(get_db)):
    """All listings, newest first (public)"""
    return PropertyRepository(db).list_all()


@router.get("/search", response_model=List[PropertyResponse])
def search_properties(
    type: PropertyType | None = Query(None, description="Exact property type"),
    status_filter: PropertyStatus | None = Query(None, alias="status", description="Exact listing status"),
    city: str | None = Query(None, description="Case-insensitive substring of the city"),
    state: str | None = Query(None, description="Case-insensitive substring of the state"),
    min_price: float | None = Query(None, alias="minPrice", ge=0, description="Inclusive lower price bound"),
    max_price: float | None = Query(None, alias="maxPrice", ge=0, description="Inclusive upper price bound"),
    bedrooms: int | None = Query(None, ge=0, description="Minimum bedrooms"),
    bathrooms: float | None = Query(None, ge=0, description="Minimum bathrooms"),
    db: Session = Depends(get_db),
):
    """Filter listings (public). All filters are optional and combined with AND."""
    params = PropertySearchParams(
        type=type,
        status=status_filter,
        city=city,
        state=state,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
    )
    return PropertyRepository(db).search(params)


@router.get("/agent/properties", response_model=List[PropertyResponse])
def get_agent_properties(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_agent),
):
    """Listings of the current agent"""
    return PropertyRepository(db).list_by_owner(current_user.id)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(property_id: int, db: Session = Depends(get_db)):
    """Listing details (public); every read counts as a view"""
    properties = PropertyRepository(db)
    prop = properties.get_or_404(property_id)
    prop.views = increment_counter(prop.views)
    properties.commit(prop)
    return prop


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("properties.write")),
):
    """Create a listing owned by the current agent"""
    values = column_values(property_data, agent_id=current_user.id)
    ensure_valid(validate_property(values))
    return PropertyRepository(db).create(Property(**values))


@router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: int,
    updates: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("properties.write")),
):
    """Update a listing (owning agent or admin)"""
    check_allowed_fields(updates, PROPERTY_UPDATABLE_FIELDS)

    properties = PropertyRepository(db)
    prop = properties.get_or_404(property_id)
    ensure_owner_or_admin(prop, current_user, "Not authorized to update this property")

    values = parse_updates(updates, PROPERTY_UPDATABLE_FIELDS, PropertyUpdate)
    ensure_valid(validate_property({**current_values(prop), **values}))

    apply_updates(prop, values)
    prop.last_updated = datetime.utcnow()
    properties.commit(prop)
    return prop


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("properties.write")),
):
    """Delete a listing (owning agent or admin)"""
    properties = PropertyRepository(db)
    prop = properties.get_or_404(property_id)
    ensure_owner_or_admin(prop, current_user, "Not authorized to delete this property")

    properties.delete(prop)
    logger.info("Property deleted", extra={"property_id": property_id, "user_id": current_user.id})
    return {"message": "Property deleted successfully"}


@router.post("/{property_id}/favorite", response_model=PropertyResponse)
def favorite_property(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("properties.favorite")),
):
    """Count a favorite (any signed-in user)"""
    properties = PropertyRepository(db)
    prop = properties.get_or_404(property_id)
    prop.favorites = increment_counter(prop.favorites)
    properties.commit(prop)
    return prop
