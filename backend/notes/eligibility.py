"""
Note eligibility matching.

Decides which study notes a student sees, given each note's targeting
(branches, semesters, year_of_study) and the student's stored profile.

All three dimensions are AND-ed together. Within a dimension the note's
entries are OR-ed. An empty or missing dimension on the note is a wildcard;
an unset profile field never satisfies a populated dimension.

Branch strings were entered by hand for a long time, so they are compared
after lowercasing and removing all whitespace, and a match in either
direction of substring containment is accepted. That containment rule is
loose (short fragments can match unrelated branches) and is kept as-is
pending a product decision.

Nothing here raises or does I/O: malformed values simply fail to match.
"""

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

from models.note import VisibilityTrace

_WHITESPACE = re.compile(r"\s+")


def normalize_branch(value: Any) -> str:
    """Lowercase a branch string and strip all whitespace ("" for non-strings)."""
    if not isinstance(value, str):
        return ""
    return _WHITESPACE.sub("", value).lower()


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _restriction(values: Any) -> list[Any]:
    """Entries of a targeting list that actually restrict (blanks dropped)."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple, set)):
        return []
    return [v for v in values if _is_present(v)]


def branch_matches(note_branches: Any, student_branch: Any) -> bool:
    allowed = _restriction(note_branches)
    if not allowed:
        return True

    student = normalize_branch(student_branch)
    if not student:
        return False

    for entry in allowed:
        candidate = normalize_branch(entry)
        if not candidate:
            continue
        if candidate == student or student in candidate or candidate in student:
            return True
    return False


def semester_matches(note_semesters: Any, student_semester: Any) -> bool:
    allowed = _restriction(note_semesters)
    if not allowed:
        return True

    semester = _as_number(student_semester)
    if semester is None:
        return False
    return any(_as_number(entry) == semester for entry in allowed)


def year_matches(note_year: Any, student_year: Any) -> bool:
    if not _is_present(note_year):
        return True

    year = _as_number(note_year)
    student = _as_number(student_year)
    return year is not None and student is not None and year == student


def _fields(record: Any) -> Mapping[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return record
    return {}


def explain_visibility(note: Any, profile: Any) -> VisibilityTrace:
    """
    Match one note against one profile and report every intermediate result.

    Args:
        note: Note record (dict from the ``notes`` table) or a NoteTargeting/Note model
        profile: User record (dict from the ``users`` table), a StudentProfile, or None

    Returns:
        VisibilityTrace with the per-dimension outcome and the normalized values compared
    """
    note_data = _fields(note)
    profile_data = _fields(profile)

    note_branches = note_data.get("branches")
    note_semesters = note_data.get("semesters")
    note_year = note_data.get("year_of_study")
    student_branch = profile_data.get("branch")
    student_semester = profile_data.get("semester")
    student_year = profile_data.get("year_of_study")

    branch_ok = branch_matches(note_branches, student_branch)
    semester_ok = semester_matches(note_semesters, student_semester)
    year_ok = year_matches(note_year, student_year)

    title = note_data.get("title")
    return VisibilityTrace(
        title=title if isinstance(title, str) else None,
        is_match=branch_ok and semester_ok and year_ok,
        branch_match=branch_ok,
        semester_match=semester_ok,
        year_match=year_ok,
        student_branch=normalize_branch(student_branch),
        note_branches=[normalize_branch(b) for b in _restriction(note_branches)],
        note_semesters=_restriction(note_semesters),
        note_year=note_year,
        student_semester=student_semester,
        student_year=student_year,
    )


def is_visible(note: Any, profile: Any) -> bool:
    """True if the note's targeting admits the profile on every dimension."""
    return explain_visibility(note, profile).is_match


def filter_catalog(notes: Iterable[Any], profile: Any) -> list[Any]:
    """Return the notes visible to ``profile``, preserving catalog order."""
    return [note for note in notes if is_visible(note, profile)]
