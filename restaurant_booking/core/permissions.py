"""
RBAC (Role-Based Access Control) permission system
"""

from dataclasses import dataclass
from enum import Enum
from typing import Set

from restaurant_booking.core.errors import Forbidden
from restaurant_booking.models.user import UserRole


class Permission(str, Enum):
    """Permission definitions"""
    # Reservation permissions
    RESERVATION_CREATE = "reservation:create"
    RESERVATION_CREATE_ANY = "reservation:create_any"
    RESERVATION_VIEW_OWN = "reservation:view_own"
    RESERVATION_VIEW_ALL = "reservation:view_all"
    RESERVATION_CANCEL_OWN = "reservation:cancel_own"
    RESERVATION_CANCEL_ANY = "reservation:cancel_any"
    RESERVATION_CHANGE_STATUS = "reservation:change_status"
    RESERVATION_DELETE = "reservation:delete"

    # Table permissions
    TABLES_VIEW = "tables:view"
    TABLES_EDIT = "tables:edit"
    TABLES_CHANGE_STATUS = "tables:change_status"


# Role permission mapping
ROLE_PERMISSIONS = {
    UserRole.ADMIN: {
        # Admins have all permissions
        Permission.RESERVATION_CREATE,
        Permission.RESERVATION_CREATE_ANY,
        Permission.RESERVATION_VIEW_OWN,
        Permission.RESERVATION_VIEW_ALL,
        Permission.RESERVATION_CANCEL_OWN,
        Permission.RESERVATION_CANCEL_ANY,
        Permission.RESERVATION_CHANGE_STATUS,
        Permission.RESERVATION_DELETE,
        Permission.TABLES_VIEW,
        Permission.TABLES_EDIT,
        Permission.TABLES_CHANGE_STATUS,
    },
    UserRole.STAFF: {
        # Staff run the floor but cannot delete records or edit the catalog
        Permission.RESERVATION_CREATE,
        Permission.RESERVATION_CREATE_ANY,
        Permission.RESERVATION_VIEW_OWN,
        Permission.RESERVATION_VIEW_ALL,
        Permission.RESERVATION_CANCEL_OWN,
        Permission.RESERVATION_CANCEL_ANY,
        Permission.RESERVATION_CHANGE_STATUS,
        Permission.TABLES_VIEW,
        Permission.TABLES_CHANGE_STATUS,
    },
    UserRole.CUSTOMER: {
        # Customers book and cancel for themselves only
        Permission.RESERVATION_CREATE,
        Permission.RESERVATION_VIEW_OWN,
        Permission.RESERVATION_CANCEL_OWN,
        Permission.TABLES_VIEW,
    },
}


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as supplied by the identity provider"""
    user_id: int
    role: UserRole

    @property
    def permissions(self) -> Set[Permission]:
        return get_permissions_for_role(self.role)

    def can(self, permission: Permission) -> bool:
        return has_permission(permission, self.permissions)


def get_permissions_for_role(role) -> Set[Permission]:
    """Get permissions for a given role"""
    if not isinstance(role, UserRole):
        try:
            role = UserRole(str(role).upper())
        except ValueError:
            return set()
    return ROLE_PERMISSIONS.get(role, set())


def has_permission(required_permission: Permission, user_permissions: Set[Permission]) -> bool:
    """Check if user has required permission"""
    return required_permission in user_permissions


def require_permission(principal: Principal, required_permission: Permission):
    """Raise Forbidden unless the principal holds the permission"""
    if not principal.can(required_permission):
        raise Forbidden(f"Permission required: {required_permission.value}")


def require_owner_or(principal: Principal, owner_id: int, override: Permission):
    """Allow the owner of a record, or anyone holding the override permission"""
    if principal.user_id == owner_id or principal.can(override):
        return
    raise Forbidden("Access denied to this reservation")
