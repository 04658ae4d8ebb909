"""
Diagnostic utility for note visibility.

Shows, for one user, how every note's targeting compares against the user's
stored profile: the normalized values and each dimension's outcome. Uses the
same matcher as the production note list.

Usage:
    # Every note, visible or not
    uv run python -m notes.debug_visibility --email student@example.edu

    # Only the notes this user cannot see
    uv run python -m notes.debug_visibility --email student@example.edu --only-hidden
"""

import argparse

from notes.catalog import list_notes
from notes.eligibility import explain_visibility
from shared.db import get_supabase_client
from users.profiles import get_user_by_email, get_user_profile


def debug_visibility(email: str, only_hidden: bool = False) -> None:
    """
    Print the visibility trace of every note for the user with ``email``.

    Args:
        email: Email of the user to diagnose
        only_hidden: If True, skip notes the user can already see
    """
    supabase = get_supabase_client()

    user = get_user_by_email(email, supabase)
    if not user:
        print(f"No user found for {email}")
        return

    profile = get_user_profile(user["id"], supabase)
    notes = list_notes(supabase)

    print("Note Visibility Diagnostics")
    print("=" * 60)
    print(f"User: {email} ({user['id']})")
    if profile:
        print(f"Branch: {profile.branch!r}")
        print(f"Semester: {profile.semester}")
        print(f"Year of study: {profile.year_of_study}")
    else:
        print("Profile: not found (matched as an empty profile)")
    print(f"Notes in catalog: {len(notes)}")
    print()

    visible_count = 0
    for note in notes:
        trace = explain_visibility(note, profile)
        if trace.is_match:
            visible_count += 1
            if only_hidden:
                continue

        status = "✓ VISIBLE" if trace.is_match else "✗ HIDDEN"
        print(f"{status}: {trace.title}")
        print(f"  branch:   {trace.branch_match}  note={trace.note_branches} student='{trace.student_branch}'")
        print(f"  semester: {trace.semester_match}  note={trace.note_semesters} student={trace.student_semester}")
        print(f"  year:     {trace.year_match}  note={trace.note_year} student={trace.student_year}")
        print()

    print("=" * 60)
    print(f"Visible: {visible_count} / {len(notes)}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Explain which notes a user can see and why'
    )

    parser.add_argument('--email', required=True, help='Email of the user to diagnose')
    parser.add_argument(
        '--only-hidden',
        action='store_true',
        help='Only show notes hidden from this user'
    )

    args = parser.parse_args()
    debug_visibility(args.email, only_hidden=args.only_hidden)


if __name__ == '__main__':
    main()
