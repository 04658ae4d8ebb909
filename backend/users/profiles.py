"""
User records and academic profiles.

Users are created on first sign-in as students with an empty profile; the
profile (branch, semester, year) is filled in later and drives note
eligibility and notification targeting.
"""

import math
from datetime import datetime, timezone
from typing import Any

from models.note import StudentProfile
from models.types import UserID
from models.user import ProfileUpdate
from shared.db import get_supabase_client


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _as_int(value: Any) -> int | None:
    """Whole-number value of an int, float or numeric string (3, 3.0, "3", "3.0")."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number) or not number.is_integer():
        return None
    return int(number)


def get_user_by_email(email: str, supabase: Any = None) -> dict[str, Any] | None:
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("users")
        .select("*")
        .eq("email", _normalize_email(email))
        .maybe_single()
        .execute()
    )
    if not response or not response.data:
        return None
    return response.data


def get_or_create_user(email: str, name: str, supabase: Any = None) -> dict[str, Any]:
    """Fetch the user for ``email``, creating a student record on first sign-in."""
    supabase = supabase or get_supabase_client()

    existing = get_user_by_email(email, supabase)
    if existing:
        return existing

    response = (
        supabase.table("users")
        .insert(
            {
                "email": _normalize_email(email),
                "name": name or email,
                "role": "student",
                "profile_completed": False,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .execute()
    )
    return response.data[0]


def get_user_profile(user_id: UserID, supabase: Any = None) -> StudentProfile | None:
    """Load the eligibility-relevant part of a user's profile."""
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("users")
        .select("branch, semester, year_of_study")
        .eq("id", user_id)
        .maybe_single()
        .execute()
    )
    if not response or not response.data:
        return None

    # Older rows hold semester/year as text; anything unparseable counts as unset
    data = response.data
    branch = data.get("branch")
    return StudentProfile(
        branch=branch if isinstance(branch, str) else None,
        semester=_as_int(data.get("semester")),
        year_of_study=_as_int(data.get("year_of_study")),
    )


def update_profile(
    email: str, profile: ProfileUpdate, supabase: Any = None
) -> dict[str, Any] | None:
    """Save a completed profile form and mark the profile complete."""
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("users")
        .update({**profile.model_dump(), "profile_completed": True})
        .eq("email", _normalize_email(email))
        .execute()
    )
    return response.data[0] if response.data else None


def delete_user(email: str, supabase: Any = None) -> None:
    supabase = supabase or get_supabase_client()

    supabase.table("users").delete().eq("email", _normalize_email(email)).execute()
