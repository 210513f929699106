import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.dependencies import get_current_active_user
from realty_crm.core.errors import DuplicateResource, Forbidden, Unauthenticated
from realty_crm.core.security import create_access_token, get_password_hash, verify_password
from realty_crm.models.user import User, UserRole
from realty_crm.repositories.users import UserRepository
from realty_crm.schemas.common import MessageResponse
from realty_crm.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    UserCreate,
    UserResponse,
)
from realty_crm.services.updates import (
    PROFILE_UPDATABLE_FIELDS,
    apply_updates,
    column_values,
    current_values,
    parse_updates,
)
from realty_crm.services.validation import ensure_valid, validate_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(request: Request, user: User) -> AuthResponse:
    token = create_access_token(user.id, config=request.app.state.settings)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Create an account and return it with a token"""
    users = UserRepository(db)
    if users.get_by_email(user_data.email):
        raise DuplicateResource("User already exists")

    # Admin accounts are provisioned, never self-registered
    if user_data.role == UserRole.ADMIN:
        raise Forbidden("Admin accounts cannot be self-registered")

    values = column_values(
        user_data,
        hashed_password=get_password_hash(user_data.password),
        is_active=True,
    )
    values.pop("password")
    ensure_valid(validate_user(values))

    user = users.create(User(**values))
    logger.info("User registered", extra={"user_id": user.id, "role": user.role})
    return _auth_response(request, user)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Check credentials and return the user with a fresh token"""
    users = UserRepository(db)
    user = users.get_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed login", extra={"email": credentials.email})
        raise Unauthenticated("Invalid credentials")
    if not user.is_active:
        raise Unauthenticated("Account is disabled")

    user.last_login = datetime.utcnow()
    users.commit(user)
    return _auth_response(request, user)


@router.get("/me", response_model=CurrentUserResponse)
def get_me(current_user: User = Depends(get_current_active_user)):
    """Current user"""
    return {"user": current_user}


@router.put("/profile", response_model=CurrentUserResponse)
def update_profile(
    updates: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Update own profile (allow-listed fields only)"""
    values = parse_updates(updates, PROFILE_UPDATABLE_FIELDS, ProfileUpdate)
    ensure_valid(validate_user({**current_values(current_user), **values}))

    apply_updates(current_user, values)
    UserRepository(db).commit(current_user)
    return {"user": current_user}


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    passwords: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Change own password after checking the current one"""
    if not verify_password(passwords.current_password, current_user.hashed_password):
        raise Unauthenticated("Current password is incorrect")

    current_user.hashed_password = get_password_hash(passwords.new_password)
    UserRepository(db).commit(current_user)
    return {"message": "Password updated successfully"}


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_active_user)):
    """Tokens are stateless; the client drops its copy"""
    return {"message": "Logged out successfully"}
