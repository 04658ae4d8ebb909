"""Pydantic models for data validation and type checking."""

from models.campus import EventCreate, EventUpdate, LostFoundCreate, TimetableEntryCreate
from models.note import Note, NoteCreate, NoteTargeting, StudentProfile, VisibilityTrace
from models.notification import AudienceCriterion, Notification, NotificationPayload
from models.user import ProfileUpdate, UserRecord

__all__ = [
    "Note",
    "NoteCreate",
    "NoteTargeting",
    "StudentProfile",
    "VisibilityTrace",
    "AudienceCriterion",
    "Notification",
    "NotificationPayload",
    "EventCreate",
    "EventUpdate",
    "LostFoundCreate",
    "TimetableEntryCreate",
    "ProfileUpdate",
    "UserRecord",
]
