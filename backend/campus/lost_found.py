"""
Lost & found board.

Any signed-in user can report an item; every report is broadcast to all
users as a LOST_FOUND notification.
"""

from datetime import datetime, timezone
from typing import Any

from models.campus import LostFoundCreate
from models.notification import NotificationPayload
from models.types import LostFoundStatus, UserID
from notifications.audience import notify_all_users
from shared.config import PortalConfig, load_config
from shared.db import get_supabase_client
from shared.utils import truncate_text


def list_items(supabase: Any = None) -> list[dict[str, Any]]:
    """All reported items, newest first."""
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("lostfound").select("*").order("created_at", desc=True).execute()
    )
    return response.data or []


def _announcement(item: LostFoundCreate) -> NotificationPayload:
    heading = "Lost Item Reported" if item.status == "lost" else "Found Item Reported"
    return NotificationPayload(
        title=f"{heading}: {item.item_name}",
        description=truncate_text(item.description, 100),
        type="LOST_FOUND",
        link="/lostfound",
    )


def report_item(
    item: LostFoundCreate,
    user_id: UserID,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> dict[str, Any]:
    """Record a lost/found item and broadcast it to every user."""
    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    response = (
        supabase.table("lostfound")
        .insert(
            {
                **item.model_dump(),
                "user_id": user_id,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .execute()
    )
    record = response.data[0]
    print(f"✓ Reported {item.status} item: {item.item_name}")

    notify_all_users(_announcement(item), supabase, config)
    return record


def update_item_status(
    item_id: str, status: LostFoundStatus, supabase: Any = None
) -> dict[str, Any] | None:
    """Move an item between lost / found / claimed."""
    if status not in ("lost", "found", "claimed"):
        raise ValueError(f"Invalid status: {status}")

    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("lostfound")
        .update({"status": status})
        .eq("id", item_id)
        .execute()
    )
    return response.data[0] if response.data else None
