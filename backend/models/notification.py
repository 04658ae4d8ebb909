"""Pydantic models for in-app notifications and their audience."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.note import NoteTargeting, drop_blank_branches
from models.types import (
    BranchName,
    NotificationID,
    NotificationType,
    Semester,
    UserID,
    YearOfStudy,
)


class AudienceCriterion(BaseModel):
    """
    Who should receive a notification.

    Each populated field is an OR-list over one user column; populated fields
    are AND-ed together. A criterion with nothing populated is a broadcast.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    branches: list[BranchName] = Field(default_factory=list)
    semesters: list[Semester] = Field(default_factory=list)
    year: YearOfStudy | None = None

    @field_validator("branches", mode="before")
    @classmethod
    def _clean_branches(cls, value: Any) -> Any:
        return drop_blank_branches(value)

    @field_validator("semesters", mode="before")
    @classmethod
    def _clean_semesters(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_broadcast(self) -> bool:
        return not self.branches and not self.semesters and self.year is None

    @classmethod
    def from_targeting(cls, targeting: NoteTargeting) -> "AudienceCriterion":
        return cls(
            branches=list(targeting.branches),
            semesters=list(targeting.semesters),
            year=targeting.year_of_study,
        )


class NotificationPayload(BaseModel):
    """Content shared by every row of a single fan-out."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = ""
    type: NotificationType
    link: str | None = None


class Notification(NotificationPayload):
    """Notification row from the ``notifications`` table."""

    id: NotificationID
    user_id: UserID
    created_at: datetime | None = None
    read: bool = False
