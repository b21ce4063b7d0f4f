from facility_console.application.security.role_matrix import (
    Permission,
    Role,
    can_manage_facilities,
    can_view_audit_log,
    can_view_facilities,
    has_permission,
)

__all__ = [
    "Permission",
    "Role",
    "can_manage_facilities",
    "can_view_audit_log",
    "can_view_facilities",
    "has_permission",
]
