from datetime import datetime
from dateutil import parser as date_parser


def parse_date_string(date_str: str) -> str | None:
    """Parse various date formats into ISO format."""
    if not date_str:
        return None
    try:
        dt = date_parser.parse(date_str, fuzzy=True)
        return str(dt.isoformat())
    except (ValueError, OverflowError, TypeError):
        return None


def truncate_text(text: str, limit: int = 100) -> str:
    """Cut text to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


def print_fanout_summary(title: str, recipients: int, inserted: int) -> None:
    """Print notification fan-out summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Notification Fan-out Complete")
    print(f"{'=' * 60}")
    print(f"Title: {title}")
    print(f"✓ Recipients resolved: {recipients}")
    print(f"✓ Notifications written: {inserted}")
    print(f"✗ Not written: {max(recipients - inserted, 0)}")
    print(f"{'=' * 60}\n")
