"""
Audience resolution and notification fan-out.

Turns an AudienceCriterion into the set of user ids to notify and writes one
notification row per recipient.

Fan-out is best-effort: nothing in the public notify_* functions raises.
Failures are printed and written to an error report, and the publish flow
that triggered the fan-out carries on. Delivery is at-least-once; a retried
publish may insert duplicate rows, and rows already written are never rolled
back.
"""

from datetime import datetime, timezone
from typing import Any

from models.notification import AudienceCriterion, NotificationPayload
from models.types import UserID
from notifications.error_logger import log_notification_error
from shared.config import PortalConfig, load_config
from shared.db import get_supabase_client

# PostgREST caps a single response at 1000 rows by default
USER_PAGE_SIZE = 1000


def select_user_ids(
    supabase: Any,
    branch_in: list[str] | None = None,
    semester_in: list[int] | None = None,
    year_eq: int | None = None,
) -> list[UserID]:
    """
    Fetch ids of users matching every given constraint.

    Each list is an IN filter; omitted constraints are not applied at all, so
    calling with no constraints returns every user.

    Returns:
        Distinct user ids in the order the store returned them
    """
    user_ids: list[UserID] = []
    seen: set[str] = set()
    start = 0

    while True:
        query = supabase.table("users").select("id")
        if branch_in:
            query = query.in_("branch", branch_in)
        if semester_in:
            query = query.in_("semester", semester_in)
        if year_eq is not None:
            query = query.eq("year_of_study", year_eq)

        response = query.order("id").range(start, start + USER_PAGE_SIZE - 1).execute()
        rows = response.data or []

        for row in rows:
            user_id = row.get("id")
            if user_id and user_id not in seen:
                seen.add(user_id)
                user_ids.append(UserID(user_id))

        if len(rows) < USER_PAGE_SIZE:
            break
        start += USER_PAGE_SIZE

    return user_ids


def resolve_audience(criterion: AudienceCriterion, supabase: Any) -> list[UserID]:
    """Resolve a criterion to user ids (raises on record-store errors)."""
    if criterion.is_broadcast:
        return select_user_ids(supabase)

    return select_user_ids(
        supabase,
        branch_in=criterion.branches or None,
        semester_in=criterion.semesters or None,
        year_eq=criterion.year,
    )


def build_notification_rows(
    user_ids: list[UserID],
    payload: NotificationPayload,
    created_at: datetime | None = None,
) -> list[dict[str, Any]]:
    """One unread notification row per recipient, all sharing a timestamp."""
    stamp = (created_at or datetime.now(timezone.utc)).isoformat()
    content = payload.model_dump()

    return [
        {"user_id": user_id, **content, "created_at": stamp, "read": False}
        for user_id in user_ids
    ]


def insert_notifications(
    supabase: Any,
    rows: list[dict[str, Any]],
    batch_size: int = 500,
    log_dir: str | None = None,
) -> int:
    """
    Insert notification rows in batches.

    A failed batch is not retried; the remaining batches are still attempted
    and all failures are reported together once the loop finishes.

    Returns:
        Number of rows written
    """
    inserted = 0
    failed_batches = []

    for start in range(0, len(rows), batch_size):
        batch = rows[start : start + batch_size]
        try:
            supabase.table("notifications").insert(batch, returning="minimal").execute()
            inserted += len(batch)
        except Exception as e:
            print(f"  ⚠ Could not write {len(batch)} notification(s): {e}")
            failed_batches.append(
                {
                    "first_user_id": batch[0]["user_id"],
                    "size": len(batch),
                    "error": str(e),
                }
            )

    if failed_batches:
        log_notification_error(
            error_type="fanout",
            error_message=f"Failed to write {len(failed_batches)} notification batch(es)",
            context={
                "title": rows[0].get("title"),
                "rows_total": len(rows),
                "rows_written": inserted,
                "failures": failed_batches,
            },
            log_dir=log_dir,
        )

    return inserted


def notify_target_audience(
    criterion: AudienceCriterion,
    payload: NotificationPayload,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> int:
    """
    Notify every user matching ``criterion``.

    An empty criterion is a broadcast to every user; a criterion that matches
    nobody writes nothing.

    Returns:
        Number of notification rows written (0 on any failure)
    """
    try:
        config = config or load_config()
        supabase = supabase or get_supabase_client(config)

        user_ids = resolve_audience(criterion, supabase)
        if not user_ids:
            print(f"  ⊘ No recipients for notification '{payload.title}'")
            return 0

        rows = build_notification_rows(user_ids, payload)
        inserted = insert_notifications(
            supabase, rows, config.notification_batch_size, config.error_log_dir
        )
        print(f"  ✓ Notified {inserted}/{len(user_ids)} user(s): {payload.title}")
        return inserted

    except Exception as e:
        error_file = log_notification_error(
            error_type="audience",
            error_message=str(e),
            context={
                "title": payload.title,
                "type": payload.type,
                "criterion": criterion.model_dump(),
            },
            log_dir=config.error_log_dir if config else None,
        )
        print(f"  ⚠️  Error notifying audience. Details logged to: {error_file}")
        return 0


def notify_all_users(
    payload: NotificationPayload,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> int:
    """Broadcast a notification to every user."""
    return notify_target_audience(AudienceCriterion(), payload, supabase, config)


def notify_user(
    user_id: UserID,
    payload: NotificationPayload,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> int:
    """Write a single notification row for one user (1 on success, 0 on failure)."""
    try:
        supabase = supabase or get_supabase_client(config)
        rows = build_notification_rows([user_id], payload)
        supabase.table("notifications").insert(rows[0], returning="minimal").execute()
        return 1
    except Exception as e:
        error_file = log_notification_error(
            error_type="single",
            error_message=str(e),
            context={"user_id": user_id, "title": payload.title},
            log_dir=config.error_log_dir if config else None,
        )
        print(f"  ⚠️  Failed to notify user {user_id}. Details logged to: {error_file}")
        return 0
