"""Campus events: listing, admin CRUD, and EVENT notifications on publish."""

from datetime import datetime, timezone
from typing import Any

from models.campus import EventCreate, EventUpdate
from models.notification import AudienceCriterion, NotificationPayload
from models.types import UserID
from notifications.audience import notify_target_audience
from shared.config import PortalConfig, load_config
from shared.db import get_supabase_client
from shared.utils import truncate_text


def list_events(upcoming: bool = False, supabase: Any = None) -> list[dict[str, Any]]:
    """Events in start order; ``upcoming`` keeps only those not yet started."""
    supabase = supabase or get_supabase_client()

    query = supabase.table("events").select("*")
    if upcoming:
        query = query.gte("starts_at", datetime.now(timezone.utc).isoformat())

    response = query.order("starts_at", desc=False).execute()
    return response.data or []


def create_event(
    event: EventCreate,
    created_by: UserID,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> dict[str, Any]:
    """Insert an event, then notify its audience (everyone when untargeted)."""
    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    response = (
        supabase.table("events")
        .insert({**event.record_fields(), "created_by": created_by})
        .execute()
    )
    record = response.data[0]
    print(f"✓ Created event: {record.get('title')}")

    notify_target_audience(
        AudienceCriterion.from_targeting(event.targeting),
        NotificationPayload(
            title=f"New Event: {event.title}",
            description=truncate_text(
                f"{event.starts_at.strftime('%b %d, %Y')} - {event.description}"
            ),
            type="EVENT",
            link="/events",
        ),
        supabase,
        config,
    )
    return record


def update_event(
    event_id: str, changes: EventUpdate, supabase: Any = None
) -> dict[str, Any] | None:
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("events")
        .update(changes.model_dump(mode="json", exclude_none=True))
        .eq("id", event_id)
        .execute()
    )
    return response.data[0] if response.data else None


def delete_event(event_id: str, supabase: Any = None) -> None:
    supabase = supabase or get_supabase_client()

    supabase.table("events").delete().eq("id", event_id).execute()
