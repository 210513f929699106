import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.permissions import is_admin
from realty_crm.models.user import User
from realty_crm.repositories.users import UserRepository
from realty_crm.schemas.user import UserActiveUpdate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
def get_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_admin),
):
    """All accounts (admin)"""
    return UserRepository(db).list_all()


@router.put("/{user_id}/active", response_model=UserResponse)
def set_user_active(
    user_id: int,
    active: UserActiveUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(is_admin),
):
    """Enable or disable an account (admin). Disabled accounts cannot authenticate."""
    users = UserRepository(db)
    user = users.get_or_404(user_id)
    user.is_active = active.is_active
    users.commit(user)
    logger.info(
        "User activation changed",
        extra={"user_id": user.id, "is_active": user.is_active, "by": current_user.id},
    )
    return user
