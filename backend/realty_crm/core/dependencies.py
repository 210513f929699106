import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from realty_crm.core.database import get_db
from realty_crm.core.errors import Unauthenticated
from realty_crm.core.security import decode_access_token
from realty_crm.models.user import User
from realty_crm.repositories.users import UserRepository

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported as 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user and attach both to the request"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    token = credentials.credentials
    payload = decode_access_token(token, request.app.state.settings)
    if payload is None:
        raise Unauthenticated()

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise Unauthenticated()

    user = UserRepository(db).get_active(user_id)
    if user is None:
        logger.info("Token for unknown or inactive user", extra={"user_id": user_id})
        raise Unauthenticated()

    request.state.user = user
    request.state.token = token
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    # get_current_user already filters on is_active
    return current_user
