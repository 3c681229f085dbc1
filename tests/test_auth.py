"""Tests for the auth blueprint."""

import unittest

from tests.conftest import FirebaseRoutesTestCase
from tests.mock_utils import seed_user


class AuthRoutesTestCase(FirebaseRoutesTestCase):
    def test_first_session_login_creates_profile(self) -> None:
        self.mocks["verify_id_token"].return_value = {
            "uid": "new",
            "email": "new@example.com",
        }
        response = self.client.post("/auth/session_login", json={"idToken": "tok"})

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json["created"])
        self.assertEqual(response.json["user"]["uid"], "new")
        stored = self.db.collection("users").document("new").get().to_dict()
        self.assertEqual(stored["email"], "new@example.com")
        with self.client.session_transaction() as sess:
            self.assertEqual(sess["user_id"], "new")

    def test_returning_user_keeps_profile(self) -> None:
        seed_user(self.db, "c", username="cat", avatar="c.jpg")
        self.mocks["verify_id_token"].return_value = {"uid": "c"}

        response = self.client.post("/auth/session_login", json={"idToken": "tok"})

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json["created"])
        self.assertEqual(response.json["user"]["username"], "cat")

    def test_missing_token(self) -> None:
        response = self.client.post("/auth/session_login", json={})
        self.assertEqual(response.status_code, 400)
        self.mocks["verify_id_token"].assert_not_called()

    def test_invalid_token(self) -> None:
        self.mocks["verify_id_token"].side_effect = ValueError("bad token")
        response = self.client.post("/auth/session_login", json={"idToken": "bad"})
        self.assertEqual(response.status_code, 401)
        with self.client.session_transaction() as sess:
            self.assertNotIn("user_id", sess)

    def test_logout_clears_session(self) -> None:
        seed_user(self.db, "c")
        self.login("c")
        response = self.client.get("/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get("/user/me").status_code, 401)

    def test_csrf_token(self) -> None:
        response = self.client.get("/auth/csrf-token")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json["token"])

    def test_session_for_deleted_user_is_cleared(self) -> None:
        self.login("gone")
        response = self.client.get("/user/me")
        self.assertEqual(response.status_code, 401)
        with self.client.session_transaction() as sess:
            self.assertNotIn("user_id", sess)


if __name__ == "__main__":
    unittest.main()
