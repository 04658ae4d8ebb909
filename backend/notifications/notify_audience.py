"""
CLI script for sending an announcement to a targeted audience.

Usage:
    # Notify every CS student in semesters 1 and 2
    uv run python -m notifications.notify_audience --type CLASS_UPDATE \
        --title "Lab moved" --description "Monday lab is in room 204" \
        --branch "Computer Science and Engineering(CS)" --semester 1 --semester 2

    # Broadcast to everyone
    uv run python -m notifications.notify_audience --type EVENT --title "Fest" --description "..."

    # Dry run (resolve the audience, write nothing)
    uv run python -m notifications.notify_audience --type EVENT --title "Fest" --year 2 --dry-run
"""

import argparse
from typing import get_args

from pydantic import ValidationError

from models.notification import AudienceCriterion, NotificationPayload
from models.types import NotificationType
from notifications.audience import (
    build_notification_rows,
    insert_notifications,
    resolve_audience,
)
from shared.config import load_config
from shared.db import get_supabase_client
from shared.utils import print_fanout_summary


def send_announcement(
    criterion: AudienceCriterion, payload: NotificationPayload, dry_run: bool = False
) -> dict[str, int]:
    """
    Resolve the audience and write the notifications.

    Unlike the publish flows this runs in the foreground for an operator, so
    record-store errors propagate instead of being suppressed.

    Returns:
        Dictionary with stats: recipients, inserted
    """
    config = load_config()
    supabase = get_supabase_client(config)

    scope = "everyone" if criterion.is_broadcast else criterion.model_dump(exclude_defaults=True)
    print(f"Resolving audience: {scope}")
    user_ids = resolve_audience(criterion, supabase)
    print(f"Found {len(user_ids)} recipient(s)")

    if dry_run:
        print(f"[DRY RUN] Would write {len(user_ids)} notification(s)")
        return {"recipients": len(user_ids), "inserted": 0}

    rows = build_notification_rows(user_ids, payload)
    inserted = (
        insert_notifications(
            supabase, rows, config.notification_batch_size, config.error_log_dir
        )
        if rows
        else 0
    )

    print_fanout_summary(payload.title, len(user_ids), inserted)
    return {"recipients": len(user_ids), "inserted": inserted}


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send a notification to users filtered by branch, semester and year"
    )

    parser.add_argument("--title", required=True, help="Notification title")
    parser.add_argument("--description", default="", help="Notification body")
    parser.add_argument(
        "--type",
        required=True,
        choices=get_args(NotificationType),
        help="Notification type",
    )
    parser.add_argument("--link", help="Relative link opened from the notification")
    parser.add_argument(
        "--branch",
        action="append",
        default=[],
        help="Target branch (repeatable, OR-ed)",
    )
    parser.add_argument(
        "--semester",
        action="append",
        type=int,
        default=[],
        help="Target semester 1-8 (repeatable, OR-ed)",
    )
    parser.add_argument("--year", type=int, help="Target year of study 1-4")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (resolve the audience but write nothing)",
    )

    args = parser.parse_args()

    try:
        criterion = AudienceCriterion(
            branches=args.branch, semesters=args.semester, year=args.year
        )
        payload = NotificationPayload(
            title=args.title,
            description=args.description,
            type=args.type,
            link=args.link,
        )
    except ValidationError as e:
        parser.error(str(e))

    send_announcement(criterion, payload, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
