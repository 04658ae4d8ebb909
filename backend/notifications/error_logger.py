"""
Error logging utility for the notification system.

Writes a timestamped report file per failure so best-effort paths (audience
resolution, fan-out inserts) leave a trace without raising to the caller.
"""

import os
from datetime import datetime
from typing import Any

from shared.config import load_config


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)) and value:
        return "\n" + "\n".join(f"  - {item}" for item in value)
    return str(value)


def log_notification_error(
    error_type: str,
    error_message: str,
    context: dict[str, Any] | None = None,
    log_dir: str | None = None,
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'audience', 'fanout', 'single')
        error_message: The error message
        context: Optional dictionary with additional context (criterion, payload title, etc.)
        log_dir: Directory for reports (defaults to the configured ERROR_LOG_DIR)

    Returns:
        Path to the log file created, or "" if the report could not be written
    """
    now = datetime.now()

    try:
        log_dir = log_dir or load_config().error_log_dir
        filename = os.path.join(
            log_dir, f"notification_error_{error_type}_{now.strftime('%Y%m%d_%H%M%S_%f')}.txt"
        )
        os.makedirs(log_dir, exist_ok=True)
        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Notification Error Report - {now}\n")
            f.write("=" * 60 + "\n\n")
            f.write(f"Error Type: {error_type}\n")
            f.write(f"Error Message: {error_message}\n\n")

            if context:
                f.write("Context:\n")
                f.write("-" * 60 + "\n")
                for key, value in context.items():
                    f.write(f"{key}: {_format_value(value)}\n")
    except (OSError, ValueError) as e:
        print(f"  ✗ Could not write notification error report ({error_type}): {e}")
        print(f"    {error_message}")
        return ""

    return filename
