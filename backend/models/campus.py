"""Pydantic models for events, lost & found items and timetable entries."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.note import TARGETING_FIELDS, NoteTargeting
from models.types import Day, LostFoundStatus, TimeOfDay
from shared.utils import parse_date_string


def _parse_loose_datetime(value: Any) -> Any:
    """Let admins type dates like "Jan 24, 2026 5pm" as well as ISO strings."""
    if isinstance(value, str):
        return parse_date_string(value) or value
    return value


class _TargetedContent(NoteTargeting):
    """Content whose targeting drives the fan-out but is not stored on its row."""

    def record_fields(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude=TARGETING_FIELDS)


class EventCreate(_TargetedContent):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    starts_at: datetime
    ends_at: datetime

    parse_window = field_validator("starts_at", "ends_at", mode="before")(
        _parse_loose_datetime
    )

    @model_validator(mode="after")
    def _check_window(self) -> "EventCreate":
        if self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class EventUpdate(BaseModel):
    """Partial event update; at least one field must be set."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    starts_at: datetime | None = None
    ends_at: datetime | None = None

    parse_window = field_validator("starts_at", "ends_at", mode="before")(
        _parse_loose_datetime
    )

    @model_validator(mode="after")
    def _check_not_empty(self) -> "EventUpdate":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field is required")
        if self.starts_at and self.ends_at and self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class LostFoundCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    item_name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: LostFoundStatus
    contact: str = Field(..., min_length=1)


class TimetableEntryCreate(_TargetedContent):
    course: str = Field(..., min_length=1)
    day: Day
    start_time: TimeOfDay
    end_time: TimeOfDay
    room: str = Field(..., min_length=1)
    faculty: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_times(self) -> "TimetableEntryCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self
