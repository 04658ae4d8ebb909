"""Portal-wide counts for the super admin overview."""

from typing import Any, Mapping

from shared.config import PortalConfig
from shared.db import get_supabase_client
from users.roles import require_super_admin

COUNTED_TABLES = ("users", "notes", "events", "lostfound")


def _count(query: Any) -> int:
    response = query.execute()
    if response.count is not None:
        return response.count
    return len(response.data or [])


def get_admin_stats(
    user: Mapping[str, Any], config: PortalConfig, supabase: Any = None
) -> dict[str, int]:
    """
    Count rows per table plus completed profiles.

    Raises:
        AuthorizationError: If ``user`` is not the configured super admin
    """
    require_super_admin(user, config)
    supabase = supabase or get_supabase_client(config)

    stats = {
        table: _count(supabase.table(table).select("id", count="exact"))
        for table in COUNTED_TABLES
    }
    stats["profiles_completed"] = _count(
        supabase.table("users").select("id", count="exact").eq("profile_completed", True)
    )
    return stats
