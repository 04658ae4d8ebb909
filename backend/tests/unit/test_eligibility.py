"""
Unit tests for notes/eligibility.py

Tests per-dimension matching (branch, semester, year), wildcard handling,
malformed targeting data, and catalog filtering.
"""

import unittest

from models.note import NoteTargeting, StudentProfile
from notes.eligibility import (
    branch_matches,
    explain_visibility,
    filter_catalog,
    is_visible,
    normalize_branch,
    semester_matches,
    year_matches,
)
from tests.fixtures.note_factory import create_test_note
from tests.fixtures.user_factory import CS_BRANCH, EC_BRANCH, create_test_user

CIVIL_BRANCH = "Civil Engineering (CE)"


class TestNormalizeBranch(unittest.TestCase):
    """Tests for normalize_branch()"""

    def test_lowercases_and_strips_all_whitespace(self):
        self.assertEqual(
            normalize_branch("  Computer Science and Engineering (CS) "),
            "computerscienceandengineering(cs)",
        )

    def test_tabs_and_newlines_removed(self):
        self.assertEqual(normalize_branch("Civil\tEngineering\n(CE)"), "civilengineering(ce)")

    def test_non_string_is_empty(self):
        self.assertEqual(normalize_branch(None), "")
        self.assertEqual(normalize_branch(42), "")


class TestBranchMatches(unittest.TestCase):
    """Tests for branch_matches()"""

    def test_empty_list_is_wildcard(self):
        self.assertTrue(branch_matches([], CS_BRANCH))
        self.assertTrue(branch_matches([], None))

    def test_missing_field_is_wildcard(self):
        self.assertTrue(branch_matches(None, CS_BRANCH))

    def test_exact_match(self):
        self.assertTrue(branch_matches([CS_BRANCH], CS_BRANCH))

    def test_spacing_and_case_do_not_matter(self):
        """'Computer Science and Engineering (CS)' vs stored 'Computer Science and Engineering(CS)'"""
        self.assertTrue(
            branch_matches(["computer science and engineering (CS)"], CS_BRANCH)
        )

    def test_any_listed_branch_is_enough(self):
        """OR logic within the dimension"""
        self.assertTrue(branch_matches([EC_BRANCH, CS_BRANCH], CS_BRANCH))

    def test_other_branch_does_not_match(self):
        self.assertFalse(branch_matches([EC_BRANCH], CS_BRANCH))

    def test_substring_in_either_direction_matches(self):
        self.assertTrue(branch_matches(["Computer Science"], CS_BRANCH))
        self.assertTrue(branch_matches([CS_BRANCH], "(CS)"))

    def test_unset_student_branch_fails_restricted_note(self):
        """A student with no branch must not see branch-restricted notes"""
        self.assertFalse(branch_matches([CS_BRANCH], None))
        self.assertFalse(branch_matches([CS_BRANCH], ""))
        self.assertFalse(branch_matches([CS_BRANCH], "   "))

    def test_blank_entries_do_not_restrict(self):
        self.assertTrue(branch_matches(["", "  "], EC_BRANCH))

    def test_non_string_entry_restricts_but_never_matches(self):
        self.assertFalse(branch_matches([42], CS_BRANCH))
        self.assertTrue(branch_matches([42, CS_BRANCH], CS_BRANCH))

    def test_bare_string_treated_as_single_entry(self):
        self.assertTrue(branch_matches(CS_BRANCH, CS_BRANCH))
        self.assertFalse(branch_matches(CS_BRANCH, EC_BRANCH))


class TestSemesterMatches(unittest.TestCase):
    """Tests for semester_matches()"""

    def test_empty_list_is_wildcard(self):
        self.assertTrue(semester_matches([], 3))
        self.assertTrue(semester_matches(None, None))

    def test_member_matches(self):
        self.assertTrue(semester_matches([1, 3, 5], 3))

    def test_non_member_does_not_match(self):
        self.assertFalse(semester_matches([1, 2], 3))

    def test_compared_numerically(self):
        """Stored "3" (text) and 3 (int) are the same semester"""
        self.assertTrue(semester_matches(["3"], 3))
        self.assertTrue(semester_matches([3], "3"))
        self.assertTrue(semester_matches([" 3 "], 3.0))

    def test_unset_student_semester_fails(self):
        self.assertFalse(semester_matches([3], None))

    def test_unparseable_entries_never_match(self):
        self.assertFalse(semester_matches(["third"], 3))
        self.assertFalse(semester_matches([True], 1))
        self.assertFalse(semester_matches([3], "third"))


class TestYearMatches(unittest.TestCase):
    """Tests for year_matches()"""

    def test_none_and_blank_are_wildcards(self):
        self.assertTrue(year_matches(None, 2))
        self.assertTrue(year_matches("", 2))
        self.assertTrue(year_matches(None, None))

    def test_equal_year_matches(self):
        self.assertTrue(year_matches(2, 2))
        self.assertTrue(year_matches("2", 2))

    def test_different_year_does_not_match(self):
        self.assertFalse(year_matches(2, 3))

    def test_zero_is_a_restriction(self):
        self.assertFalse(year_matches(0, 1))

    def test_unset_student_year_fails(self):
        self.assertFalse(year_matches(2, None))

    def test_nan_never_matches(self):
        self.assertFalse(year_matches(float("nan"), 2))


class TestExplainVisibility(unittest.TestCase):
    """Tests for explain_visibility() trace contents"""

    def test_trace_reports_each_dimension(self):
        note = create_test_note(
            title="Signals", branches=[EC_BRANCH], semesters=[3], year_of_study=2
        )
        student = create_test_user(branch=CS_BRANCH, semester=3, year_of_study=2)

        trace = explain_visibility(note, student)

        self.assertEqual(trace.title, "Signals")
        self.assertFalse(trace.is_match)
        self.assertFalse(trace.branch_match)
        self.assertTrue(trace.semester_match)
        self.assertTrue(trace.year_match)
        self.assertEqual(trace.student_branch, "computerscienceandengineering(cs)")
        self.assertEqual(
            trace.note_branches, ["electronicsandcommunicationengineering(ec)"]
        )
        self.assertEqual(trace.note_semesters, [3])

    def test_accepts_models(self):
        targeting = NoteTargeting(branches=[CS_BRANCH], semesters=[3])
        profile = StudentProfile(branch=CS_BRANCH, semester=3, year_of_study=2)

        self.assertTrue(explain_visibility(targeting, profile).is_match)

    def test_missing_profile_is_empty_profile(self):
        open_note = create_test_note()
        restricted = create_test_note(semesters=[1])

        self.assertTrue(is_visible(open_note, None))
        self.assertFalse(is_visible(restricted, None))

    def test_malformed_records_do_not_raise(self):
        note = create_test_note(branches="not-a-list", semesters={"x": 1}, year_of_study=[2])
        note["title"] = 12345

        trace = explain_visibility(note, "not a profile")

        self.assertFalse(trace.is_match)
        self.assertIsNone(trace.title)

    def test_non_record_note_is_unrestricted(self):
        self.assertTrue(is_visible(object(), create_test_user()))


class TestIsVisible(unittest.TestCase):
    """Tests for is_visible() AND logic across dimensions"""

    def setUp(self):
        self.student = create_test_user(branch=CS_BRANCH, semester=3, year_of_study=2)

    def test_fully_open_note_visible_to_everyone(self):
        note = create_test_note()

        self.assertTrue(is_visible(note, self.student))
        self.assertTrue(is_visible(note, create_test_user(branch=None, semester=None)))

    def test_all_dimensions_must_match(self):
        note = create_test_note(branches=[CS_BRANCH], semesters=[3], year_of_study=2)
        self.assertTrue(is_visible(note, self.student))

        wrong_year = create_test_note(branches=[CS_BRANCH], semesters=[3], year_of_study=3)
        self.assertFalse(is_visible(wrong_year, self.student))

    def test_semester_only_restriction(self):
        """Note for semester 1 with no branch restriction: any branch in sem 1 sees it"""
        note = create_test_note(semesters=[1])

        self.assertTrue(is_visible(note, create_test_user(branch=EC_BRANCH, semester=1)))
        self.assertFalse(is_visible(note, self.student))

    def test_unprofiled_student_does_not_see_branch_note(self):
        """Regression: an empty branch used to match every branch restriction"""
        note = create_test_note(branches=[CS_BRANCH])
        student = create_test_user(branch=None)

        self.assertFalse(is_visible(note, student))

    def test_normalization_invariance(self):
        """Extra spaces and different case on either side never change the outcome"""
        note = create_test_note(branches=["  COMPUTER science and ENGINEERING (cs)"])
        student = create_test_user(branch="computer   science and engineering(CS) ")

        self.assertEqual(
            is_visible(note, student),
            is_visible(create_test_note(branches=[CS_BRANCH]), self.student),
        )


class TestFilterCatalog(unittest.TestCase):
    """Tests for filter_catalog()"""

    def setUp(self):
        self.notes = [
            create_test_note(note_id="n1", title="Open", created_at="2026-01-05T00:00:00"),
            create_test_note(
                note_id="n2", title="CS sem 3", branches=[CS_BRANCH], semesters=[3],
                created_at="2026-01-04T00:00:00",
            ),
            create_test_note(
                note_id="n3", title="EC only", branches=[EC_BRANCH],
                created_at="2026-01-03T00:00:00",
            ),
            create_test_note(
                note_id="n4", title="Year 1", year_of_study=1,
                created_at="2026-01-02T00:00:00",
            ),
            create_test_note(
                note_id="n5", title="Civil or CS", branches=[CIVIL_BRANCH, CS_BRANCH],
                created_at="2026-01-01T00:00:00",
            ),
        ]

    def test_cs_student_sees_matching_notes_in_order(self):
        student = create_test_user(branch=CS_BRANCH, semester=3, year_of_study=2)

        visible = filter_catalog(self.notes, student)

        self.assertEqual([n["id"] for n in visible], ["n1", "n2", "n5"])

    def test_unprofiled_student_sees_only_open_notes(self):
        student = create_test_user(branch=None, semester=None, year_of_study=None)

        visible = filter_catalog(self.notes, student)

        self.assertEqual([n["id"] for n in visible], ["n1"])

    def test_filtering_is_idempotent(self):
        student = create_test_user(branch=EC_BRANCH, semester=1, year_of_study=1)

        once = filter_catalog(self.notes, student)
        twice = filter_catalog(once, student)

        self.assertEqual(once, twice)
        self.assertEqual([n["id"] for n in once], ["n1", "n3", "n4"])

    def test_semester_and_year_scenario(self):
        """A semester-3 note and an EC/year-2 note against EC students in semesters 3 and 4"""
        catalog = [
            create_test_note(note_id="sem3", branches=[], semesters=[3], year_of_study=None),
            create_test_note(note_id="ec-y2", branches=["EC"], semesters=[], year_of_study=2),
        ]

        sem3_student = {"branch": "EC", "semester": 3, "year_of_study": 2}
        sem4_student = {"branch": "EC", "semester": 4, "year_of_study": 2}

        self.assertEqual([n["id"] for n in filter_catalog(catalog, sem3_student)], ["sem3", "ec-y2"])
        self.assertEqual([n["id"] for n in filter_catalog(catalog, sem4_student)], ["ec-y2"])

    def test_empty_catalog(self):
        self.assertEqual(filter_catalog([], create_test_user()), [])


if __name__ == "__main__":
    unittest.main()
