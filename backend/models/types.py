"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing UserID where NoteID expected).

Uses TypeAlias/Literal for values that are constrained sets of strings or
small integers, mirroring the columns of the portal's tables.
"""

from typing import Annotated, Literal, NewType, TypeAlias

from pydantic import Field

# ID types using NewType for type safety
UserID = NewType("UserID", str)
NoteID = NewType("NoteID", str)
NotificationID = NewType("NotificationID", str)

UserRole: TypeAlias = Literal["student", "admin", "super_admin"]
NotificationType: TypeAlias = Literal["CLASS_UPDATE", "NEW_NOTE", "EVENT", "LOST_FOUND"]
LostFoundStatus: TypeAlias = Literal["lost", "found", "claimed"]
ProgramType: TypeAlias = Literal["B.Tech", "M.Tech"]
Day: TypeAlias = Literal[
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
]

Semester: TypeAlias = Annotated[int, Field(ge=1, le=8)]
YearOfStudy: TypeAlias = Annotated[int, Field(ge=1, le=4)]
BranchName: TypeAlias = str  # e.g. "Computer Science and Engineering(CS)"
TimeOfDay: TypeAlias = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
