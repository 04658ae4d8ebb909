"""
Unit tests for notifications/inbox.py

Tests that every inbox query is scoped to the requesting user.
"""

import unittest
from unittest.mock import Mock, call

from notifications.inbox import count_unread, list_notifications, mark_all_read, mark_read
from tests.fixtures.mock_helpers import create_mock_supabase
from tests.fixtures.user_factory import create_test_notification


class TestListNotifications(unittest.TestCase):
    """Tests for list_notifications()"""

    def test_scoped_and_ordered(self):
        rows = [create_test_notification(user_id="u1")]
        mock_supabase = create_mock_supabase(rows)

        result = list_notifications("u1", limit=10, supabase=mock_supabase)

        self.assertEqual(result, rows)
        mock_supabase.table.assert_called_with("notifications")
        mock_supabase.eq.assert_called_once_with("user_id", "u1")
        mock_supabase.order.assert_called_once_with("created_at", desc=True)
        mock_supabase.limit.assert_called_once_with(10)

    def test_empty_inbox(self):
        mock_supabase = create_mock_supabase()
        mock_supabase.execute.return_value = Mock(data=None)

        self.assertEqual(list_notifications("u1", supabase=mock_supabase), [])


class TestCountUnread(unittest.TestCase):
    """Tests for count_unread()"""

    def test_uses_exact_count(self):
        mock_supabase = create_mock_supabase([], count=4)

        self.assertEqual(count_unread("u1", mock_supabase), 4)
        mock_supabase.select.assert_called_once_with("id", count="exact")
        mock_supabase.eq.assert_has_calls([call("user_id", "u1"), call("read", False)])

    def test_falls_back_to_row_count(self):
        mock_supabase = create_mock_supabase([{"id": "a"}, {"id": "b"}])

        self.assertEqual(count_unread("u1", mock_supabase), 2)


class TestMarkRead(unittest.TestCase):
    """Tests for mark_read() and mark_all_read()"""

    def test_mark_read_scoped_to_owner(self):
        mock_supabase = create_mock_supabase()

        mark_read("n1", "u1", mock_supabase)

        mock_supabase.update.assert_called_once_with({"read": True})
        mock_supabase.eq.assert_has_calls([call("id", "n1"), call("user_id", "u1")])

    def test_mark_all_read(self):
        mock_supabase = create_mock_supabase()

        mark_all_read("u1", mock_supabase)

        mock_supabase.update.assert_called_once_with({"read": True})
        mock_supabase.eq.assert_called_once_with("user_id", "u1")


if __name__ == "__main__":
    unittest.main()
