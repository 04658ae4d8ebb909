"""
Per-user notification inbox.

Every query is scoped to the requesting user's id, so a user can only read
or acknowledge their own notifications.
"""

from typing import Any

from models.types import NotificationID, UserID
from shared.db import get_supabase_client

DEFAULT_INBOX_LIMIT = 50


def list_notifications(
    user_id: UserID, limit: int = DEFAULT_INBOX_LIMIT, supabase: Any = None
) -> list[dict[str, Any]]:
    """Most recent notifications for a user, newest first."""
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("notifications")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []


def count_unread(user_id: UserID, supabase: Any = None) -> int:
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("notifications")
        .select("id", count="exact")
        .eq("user_id", user_id)
        .eq("read", False)
        .execute()
    )
    if response.count is not None:
        return response.count
    return len(response.data or [])


def mark_all_read(user_id: UserID, supabase: Any = None) -> None:
    supabase = supabase or get_supabase_client()

    supabase.table("notifications").update({"read": True}).eq(
        "user_id", user_id
    ).execute()


def mark_read(
    notification_id: NotificationID, user_id: UserID, supabase: Any = None
) -> None:
    """Mark one notification read; a notification owned by someone else is left untouched."""
    supabase = supabase or get_supabase_client()

    supabase.table("notifications").update({"read": True}).eq(
        "id", notification_id
    ).eq("user_id", user_id).execute()
