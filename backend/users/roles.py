"""
Role resolution and authorization checks.

The super admin and the admin allow-list come from PortalConfig, which the
caller passes in; there is no hardcoded admin address anywhere.
"""

from typing import Any, Mapping

from models.types import UserRole
from shared.config import PortalConfig

ADMIN_ROLES = ("admin", "super_admin")


class AuthorizationError(PermissionError):
    """Raised when a user lacks the role an operation requires."""


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def is_super_admin(email: str | None, config: PortalConfig) -> bool:
    return bool(config.super_admin_email) and normalize_email(email) == config.super_admin_email


def resolve_role(email: str, current_role: UserRole, config: PortalConfig) -> UserRole:
    """
    Decide the role a user should hold at sign-in.

    The configured super admin is always promoted. Students on the admin
    allow-list are promoted to admin; existing admins are never demoted here.
    """
    if is_super_admin(email, config):
        return "super_admin"
    if current_role == "student" and normalize_email(email) in config.admin_emails:
        return "admin"
    return current_role


def sync_user_role(
    user: dict[str, Any], config: PortalConfig, supabase: Any
) -> dict[str, Any]:
    """Persist a role change for ``user`` if resolve_role() says one is due."""
    current = user.get("role") or "student"
    role = resolve_role(user.get("email", ""), current, config)

    if role != current:
        supabase.table("users").update({"role": role}).eq("id", user["id"]).execute()
        print(f"  ✓ Promoted {user.get('email')} from {current} to {role}")
        user = {**user, "role": role}

    return user


def require_admin(user: Mapping[str, Any] | None) -> None:
    if not user or user.get("role") not in ADMIN_ROLES:
        raise AuthorizationError("Unauthorized: Admin access required")


def require_super_admin(user: Mapping[str, Any] | None, config: PortalConfig) -> None:
    """Only the configured super admin passes; the stored role alone is not enough."""
    if not user or user.get("role") != "super_admin" or not is_super_admin(user.get("email"), config):
        raise AuthorizationError("Unauthorized: Super admin access required")
