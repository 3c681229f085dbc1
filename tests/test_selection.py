"""Tests for picking the members of a new group."""

import unittest

from treehouse.workflow import InvitedUser, InviteSelection


def _user(uid):
    return InvitedUser(uid=uid, profile_image_url=f"{uid}.jpg")


class InviteSelectionTestCase(unittest.TestCase):
    def test_select_keeps_pick_order(self) -> None:
        selection = InviteSelection("creator").select(_user("b")).select(_user("a"))
        self.assertEqual(selection.uids, ["b", "a"])
        self.assertEqual(len(selection), 2)
        self.assertIn("a", selection)

    def test_creator_and_duplicates_are_refused(self) -> None:
        selection = InviteSelection("creator").select(_user("a"))
        self.assertIs(selection.select(_user("creator")), selection)
        self.assertIs(selection.select(_user("a")), selection)

    def test_cap_stops_selection(self) -> None:
        selection = InviteSelection("creator", cap=2)
        for uid in ["a", "b", "c"]:
            selection = selection.select(_user(uid))
        self.assertEqual(selection.uids, ["a", "b"])
        self.assertTrue(selection.is_full)

    def test_default_cap_is_five(self) -> None:
        selection = InviteSelection("creator")
        for i in range(7):
            selection = selection.select(_user(f"u{i}"))
        self.assertEqual(len(selection), 5)

    def test_toggle_deselects_then_frees_a_slot(self) -> None:
        selection = InviteSelection("creator", cap=1).select(_user("a"))
        self.assertIs(selection.toggle(_user("b")), selection)

        selection = selection.toggle(_user("a"))
        self.assertEqual(selection.uids, [])
        selection = selection.toggle(_user("b"))
        self.assertEqual(selection.uids, ["b"])

    def test_select_all_reports_refused(self) -> None:
        selection, refused = InviteSelection("creator", cap=2).select_all(
            [_user("a"), _user("creator"), _user("b"), _user("a"), _user("c")]
        )
        self.assertEqual(selection.uids, ["a", "b"])
        self.assertEqual([u.uid for u in refused], ["creator", "c"])


if __name__ == "__main__":
    unittest.main()
