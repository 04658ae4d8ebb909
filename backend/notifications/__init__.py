"""
In-app notification system for the campus portal.

This module handles:
- Resolving the audience for a notification (branch / semester / year targeting)
- Fanning out one notification row per recipient
- Reading and acknowledging a user's notifications
"""

from .audience import notify_all_users, notify_target_audience, notify_user
from .inbox import list_notifications, mark_all_read, mark_read

__all__ = [
    'notify_target_audience',
    'notify_all_users',
    'notify_user',
    'list_notifications',
    'mark_all_read',
    'mark_read',
]
