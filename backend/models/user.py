"""Pydantic models for portal users and their academic profile."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.types import BranchName, ProgramType, Semester, UserID, UserRole, YearOfStudy


class UserRecord(BaseModel):
    """User row as stored in the ``users`` table."""

    model_config = ConfigDict(extra="ignore")

    id: UserID
    email: str = Field(..., pattern=r"^[^@]+@[^@]+\.[^@]+$")
    name: str = ""
    role: UserRole = "student"
    college: str | None = None
    mobile: str | None = None
    semester: int | None = None
    year_of_study: int | None = None
    branch: BranchName | None = None
    program_type: ProgramType | None = None
    profile_completed: bool = False
    created_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Profile form submitted by a student. Every field is required."""

    model_config = ConfigDict(str_strip_whitespace=True)

    college: str = Field(..., min_length=1)
    mobile: str = Field(..., pattern=r"^\+?[0-9 \-]{7,15}$")
    semester: Semester
    year_of_study: YearOfStudy
    branch: BranchName = Field(..., min_length=1)
    program_type: ProgramType
