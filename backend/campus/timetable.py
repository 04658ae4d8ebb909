"""Class timetable with CLASS_UPDATE notifications to the affected students."""

from typing import Any

from models.campus import TimetableEntryCreate
from models.notification import AudienceCriterion, NotificationPayload
from notifications.audience import notify_target_audience
from shared.config import PortalConfig, load_config
from shared.db import get_supabase_client

DAY_ORDER = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

EDITABLE_FIELDS = ("course", "day", "start_time", "end_time", "room", "faculty")


def _sort_key(entry: dict[str, Any]) -> tuple[int, str]:
    day = entry.get("day")
    position = DAY_ORDER.index(day) if day in DAY_ORDER else len(DAY_ORDER)
    return position, str(entry.get("start_time") or "")


def get_timetable(course: str | None = None, supabase: Any = None) -> list[dict[str, Any]]:
    """Timetable entries in weekday then start-time order, optionally for one course."""
    supabase = supabase or get_supabase_client()

    query = supabase.table("timetable").select("*")
    if course:
        query = query.eq("course", course)

    response = query.execute()
    return sorted(response.data or [], key=_sort_key)


def _class_update(entry: dict[str, Any], verb: str) -> NotificationPayload:
    return NotificationPayload(
        title=f"Class {verb}: {entry.get('course')}",
        description=(
            f"{entry.get('day')} {entry.get('start_time')}-{entry.get('end_time')} "
            f"in {entry.get('room')} ({entry.get('faculty')})"
        ),
        type="CLASS_UPDATE",
        link="/timetable",
    )


def create_timetable_entry(
    entry: TimetableEntryCreate,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> dict[str, Any]:
    """Insert a timetable entry and notify the students it targets."""
    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    response = supabase.table("timetable").insert(entry.record_fields()).execute()
    record = response.data[0]
    print(f"✓ Added timetable entry: {record.get('course')} on {record.get('day')}")

    notify_target_audience(
        AudienceCriterion.from_targeting(entry.targeting),
        _class_update(record, "Scheduled"),
        supabase,
        config,
    )
    return record


def update_timetable_entry(
    entry_id: str,
    changes: dict[str, Any],
    criterion: AudienceCriterion | None = None,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> dict[str, Any] | None:
    """
    Apply a partial update to a timetable entry.

    Args:
        entry_id: Timetable row id
        changes: Fields to change (only course/day/times/room/faculty are applied)
        criterion: If given, students matching it are sent a CLASS_UPDATE

    Returns:
        The updated row, or None if no row matched
    """
    updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v}
    if not updates:
        raise ValueError("At least one field is required")

    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    response = supabase.table("timetable").update(updates).eq("id", entry_id).execute()
    record = response.data[0] if response.data else None

    if record and criterion is not None:
        notify_target_audience(criterion, _class_update(record, "Updated"), supabase, config)
    return record
