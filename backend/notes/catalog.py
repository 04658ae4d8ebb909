"""
Study note catalog.

Notes are links to documents on an external host (Google Drive); only the
metadata and targeting live in the ``notes`` table. Publishing a note fans
out a NEW_NOTE notification to the note's target audience.
"""

from datetime import datetime, timezone
from typing import Any

from models.note import NoteCreate
from models.notification import AudienceCriterion, NotificationPayload
from models.types import NoteID, UserID
from notes.eligibility import explain_visibility
from notifications.audience import notify_target_audience
from shared.config import PortalConfig, load_config
from shared.db import get_supabase_client
from users.profiles import get_user_profile


def list_notes(supabase: Any = None) -> list[dict[str, Any]]:
    """All notes, newest first."""
    supabase = supabase or get_supabase_client()

    response = (
        supabase.table("notes").select("*").order("created_at", desc=True).execute()
    )
    return response.data or []


def get_note(note_id: NoteID, supabase: Any = None) -> dict[str, Any] | None:
    supabase = supabase or get_supabase_client()

    response = supabase.table("notes").select("*").eq("id", note_id).maybe_single().execute()
    if not response or not response.data:
        return None
    return response.data


def get_note_download_url(note_id: NoteID, supabase: Any = None) -> str | None:
    """Link to the note's document on the external host, or None if unknown."""
    note = get_note(note_id, supabase)
    if not note:
        return None
    return note.get("drive_url") or None


def get_notes_for_user(
    user_id: UserID, supabase: Any = None, config: PortalConfig | None = None
) -> list[dict[str, Any]]:
    """
    Notes the user is eligible to see, newest first.

    A user without a stored profile is matched as a profile with every field
    unset, so they only see notes that do not restrict any dimension.

    Args:
        user_id: Requesting user's id
        supabase: Optional Supabase client (created from config if omitted)
        config: Optional PortalConfig; ``notes_debug`` prints every trace

    Returns:
        Filtered list of note records
    """
    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    profile = get_user_profile(user_id, supabase)
    notes = list_notes(supabase)

    visible = []
    hidden = []
    for note in notes:
        trace = explain_visibility(note, profile)
        if trace.is_match:
            visible.append(note)
        else:
            hidden.append(trace)

    if hidden:
        print(
            f"  ⊘ Hid {len(hidden)} of {len(notes)} note(s) for user {user_id} "
            f"(branch='{hidden[0].student_branch}', "
            f"semester={hidden[0].student_semester}, year={hidden[0].student_year})"
        )
        if config.notes_debug or not visible:
            for trace in hidden:
                print(
                    f"    - {trace.title}: branch={trace.branch_match} "
                    f"semester={trace.semester_match} year={trace.year_match} "
                    f"note_branches={trace.note_branches} "
                    f"note_semesters={trace.note_semesters} note_year={trace.note_year}"
                )

    return visible


def publish_note(
    note: NoteCreate,
    created_by: UserID,
    supabase: Any = None,
    config: PortalConfig | None = None,
) -> dict[str, Any]:
    """
    Create a note and notify its target audience.

    The fan-out is awaited in-line but cannot fail the publish: the note row
    is the guaranteed result, notifications are best-effort.

    Returns:
        The inserted note record
    """
    config = config or load_config()
    supabase = supabase or get_supabase_client(config)

    response = (
        supabase.table("notes")
        .insert(
            {
                **note.model_dump(),
                "created_by": created_by,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .execute()
    )
    record = response.data[0]
    print(f"✓ Published note: {record.get('title')}")

    notify_target_audience(
        AudienceCriterion.from_targeting(note.targeting),
        NotificationPayload(
            title=f"New Note: {note.title}",
            description=f"New study material for {note.course}",
            type="NEW_NOTE",
            link=f"/notes/{record.get('id')}",
        ),
        supabase,
        config,
    )
    return record


def delete_note(note_id: NoteID, supabase: Any = None) -> None:
    supabase = supabase or get_supabase_client()

    supabase.table("notes").delete().eq("id", note_id).execute()
