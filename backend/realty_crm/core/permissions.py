"""
Role-based access control.

Permissions are named "module.action" (e.g. "clients.write") and mapped to the
roles that hold them. Admins hold every permission.

Ownership of individual clients, leads and properties is checked separately by
``ensure_owner_or_admin`` once the resource has been loaded, so a missing
resource is reported as 404 before any 403.
"""
from typing import Any, Dict, Iterable, List

from fastapi import Depends

from realty_crm.core.dependencies import get_current_active_user
from realty_crm.core.errors import Forbidden
from realty_crm.models.user import User, UserRole

# Permission -> roles allowed to use it
PERMISSIONS: Dict[str, List[UserRole]] = {
    # Listings
    "properties.write": [UserRole.AGENT],
    "properties.favorite": [UserRole.USER, UserRole.AGENT],

    # Clients
    "clients.read": [UserRole.USER, UserRole.AGENT],
    "clients.write": [UserRole.AGENT],

    # Leads
    "leads.read": [UserRole.USER, UserRole.AGENT],
    "leads.write": [UserRole.AGENT],
    "leads.convert": [UserRole.AGENT],

    # Accounts
    "users.manage": [],
}

ADMIN_HAS_ALL = True


def _as_role(role: Any) -> UserRole:
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        raise Forbidden("Invalid user role")


def has_permission(user_role: UserRole, permission: str) -> bool:
    """
    Check whether a role holds a permission.

    Args:
        user_role: the user's role
        permission: permission name, e.g. "clients.write"

    Returns:
        True if the role holds the permission
    """
    if ADMIN_HAS_ALL and user_role == UserRole.ADMIN:
        return True
    allowed_roles = PERMISSIONS.get(permission, [])
    return user_role in allowed_roles


def require_permission(permission: str):
    """
    FastAPI dependency that checks a permission for the current user.

    Example:
        @router.post("/leads")
        def create_lead(current_user: User = Depends(require_permission("leads.write"))):
            ...
    """
    def permission_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not has_permission(_as_role(current_user.role), permission):
            raise Forbidden(f"Not enough permissions. Required: {permission}")
        return current_user

    return permission_checker


def require_role(roles: Iterable[UserRole], message: str):
    """FastAPI dependency that passes only users whose role is in ``roles``."""
    allowed = set(roles)

    def role_checker(current_user: User = Depends(get_current_active_user)) -> User:
        if _as_role(current_user.role) not in allowed:
            raise Forbidden(message)
        return current_user

    return role_checker


is_admin = require_role([UserRole.ADMIN], "Access denied. Admin privileges required.")
is_agent = require_role([UserRole.AGENT, UserRole.ADMIN], "Access denied. Agent privileges required.")
is_agent_or_admin = require_role(
    [UserRole.AGENT, UserRole.ADMIN], "Access denied. Agent or admin privileges required."
)


def is_owner_or_admin(resource: Any, user: User) -> bool:
    return resource.owner_id == user.id or _as_role(user.role) == UserRole.ADMIN


def ensure_owner_or_admin(resource: Any, user: User, message: str = "Not authorized") -> None:
    if not is_owner_or_admin(resource, user):
        raise Forbidden(message)
