"""
Core permissions utilities for role-based access control.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet
from ..auth.models import UserRole


@dataclass(frozen=True)
class AccessLevel:
    """
    Authorization required by a protected operation.

    Attributes:
        authenticated: Whether a verified session is needed at all
        allowed_roles: Roles that may run the operation; empty means any role
    """
    authenticated: bool
    allowed_roles: FrozenSet[UserRole] = frozenset()

    @property
    def is_public(self) -> bool:
        return not self.authenticated

    def permits(self, role: UserRole) -> bool:
        """
        Check whether a session role satisfies this level.

        Args:
            role: Role of the verified session

        Returns:
            bool: True if the role is allowed
        """
        return not self.allowed_roles or role in self.allowed_roles


PUBLIC = AccessLevel(authenticated=False)
ANY_AUTHENTICATED = AccessLevel(authenticated=True)


def roles(*allowed: UserRole) -> AccessLevel:
    """
    Build an access level restricted to a set of roles.

    Args:
        allowed: One or more roles permitted to run the operation

    Returns:
        AccessLevel: Role-restricted level
    """
    if not allowed:
        raise ValueError("roles() needs at least one role")
    return AccessLevel(authenticated=True, allowed_roles=frozenset(UserRole(role) for role in allowed))


class Operation(str, Enum):
    """
    Protected operations exposed by the portal.
    """
    LOGIN = "login"
    VERIFY_SESSION = "verify_session"
    CHANGE_PASSWORD = "change_password"
    LOGOUT = "logout"

    CREATE_USER = "create_user"
    LIST_USERS = "list_users"
    UPDATE_USER = "update_user"

    VIEW_ADMIN_DASHBOARD = "view_admin_dashboard"
    VIEW_DOCTOR_DASHBOARD = "view_doctor_dashboard"
    VIEW_RECEPTIONIST_DASHBOARD = "view_receptionist_dashboard"


# Operation-to-access mapping
OPERATION_ACCESS: Dict[Operation, AccessLevel] = {
    Operation.LOGIN: PUBLIC,
    Operation.VERIFY_SESSION: ANY_AUTHENTICATED,
    Operation.CHANGE_PASSWORD: ANY_AUTHENTICATED,
    Operation.LOGOUT: ANY_AUTHENTICATED,

    # User management is admin only
    Operation.CREATE_USER: roles(UserRole.ADMIN),
    Operation.LIST_USERS: roles(UserRole.ADMIN),
    Operation.UPDATE_USER: roles(UserRole.ADMIN),

    # Each dashboard belongs to exactly one role
    Operation.VIEW_ADMIN_DASHBOARD: roles(UserRole.ADMIN),
    Operation.VIEW_DOCTOR_DASHBOARD: roles(UserRole.DOCTOR),
    Operation.VIEW_RECEPTIONIST_DASHBOARD: roles(UserRole.RECEPTIONIST),
}


def get_access_level(operation: Operation) -> AccessLevel:
    """
    Get the access level required by an operation.

    Args:
        operation: Protected operation

    Returns:
        AccessLevel: Required level
    """
    return OPERATION_ACCESS[Operation(operation)]
