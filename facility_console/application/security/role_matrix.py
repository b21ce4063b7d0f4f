from __future__ import annotations

from typing import Final, Literal

Role = Literal["admin", "support"]
Permission = Literal[
    "view_facilities",
    "manage_facilities",
    "view_audit_log",
]

_ROLE_PERMISSIONS: Final[dict[Role, frozenset[Permission]]] = {
    "admin": frozenset(
        {
            "view_facilities",
            "manage_facilities",
            "view_audit_log",
        }
    ),
    # internal/external support staff browse lists but never create or edit
    "support": frozenset({"view_facilities", "view_audit_log"}),
}


def has_permission(role: Role, permission: Permission) -> bool:
    return permission in _ROLE_PERMISSIONS.get(role, frozenset())


def can_view_facilities(role: Role) -> bool:
    return has_permission(role, "view_facilities")


def can_manage_facilities(role: Role) -> bool:
    return has_permission(role, "manage_facilities")


def can_view_audit_log(role: Role) -> bool:
    return has_permission(role, "view_audit_log")
