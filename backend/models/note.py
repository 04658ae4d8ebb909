"""Pydantic models for study notes and their audience targeting."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import BranchName, NoteID, Semester, UserID, YearOfStudy

TARGETING_FIELDS = {"branches", "semesters", "year_of_study"}


def drop_blank_branches(value: Any) -> Any:
    """Accept None, a bare string, or a list; blank entries are removed."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple, set)):
        return [b for b in value if not (isinstance(b, str) and not b.strip())]
    return value


class NoteTargeting(BaseModel):
    """
    Audience restriction attached to a note (and to events and timetable entries).

    Every field is optional and independent: an empty list or None means
    "no restriction on this axis", never "nobody".
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    branches: list[BranchName] = Field(default_factory=list)
    semesters: list[Semester] = Field(default_factory=list)
    year_of_study: YearOfStudy | None = None

    @field_validator("branches", mode="before")
    @classmethod
    def _clean_branches(cls, value: Any) -> Any:
        return drop_blank_branches(value)

    @field_validator("semesters", mode="before")
    @classmethod
    def _clean_semesters(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_wildcard(self) -> bool:
        return not self.branches and not self.semesters and self.year_of_study is None

    @property
    def targeting(self) -> "NoteTargeting":
        return NoteTargeting.model_validate(self.model_dump(include=TARGETING_FIELDS))


class NoteCreate(NoteTargeting):
    """Note data submitted by an admin (before ID assignment)."""

    title: str = Field(..., min_length=1)
    course: str = Field(..., min_length=1)
    file_id: str = Field(..., min_length=1)
    drive_url: str = Field(..., pattern=r"^https?://")


class Note(NoteCreate):
    """Complete note record from database."""

    id: NoteID
    created_by: UserID | None = None
    created_at: datetime | None = None


class StudentProfile(BaseModel):
    """The subset of a user record that note eligibility depends on."""

    model_config = ConfigDict(extra="ignore")

    branch: BranchName | None = None
    semester: int | None = None
    year_of_study: int | None = None


class VisibilityTrace(BaseModel):
    """Per-dimension outcome of matching one note against one profile."""

    title: str | None = None
    is_match: bool
    branch_match: bool
    semester_match: bool
    year_match: bool
    student_branch: str
    note_branches: list[str] = Field(default_factory=list)
    note_semesters: list[Any] = Field(default_factory=list)
    note_year: Any = None
    student_semester: Any = None
    student_year: Any = None
