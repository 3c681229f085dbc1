"""Tests for the user blueprint."""

import unittest

from tests.conftest import FirebaseRoutesTestCase, make_image_bytes
from tests.mock_utils import seed_user


class UserRoutesTestCase(FirebaseRoutesTestCase):
    def setUp(self) -> None:
        super().setUp()
        seed_user(self.db, "c", username="cat", avatar="c.jpg")
        seed_user(self.db, "i1", username="ivy", avatar="i1.jpg")

    def test_requires_login(self) -> None:
        response = self.client.get("/user/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json["status"], "error")

    def test_me(self) -> None:
        self.login("c")
        response = self.client.get("/user/me")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json["user"],
            {
                "uid": "c",
                "username": "cat",
                "profileImageURL": "c.jpg",
                "email": "c@example.com",
            },
        )

    def test_update_username(self) -> None:
        self.login("c")
        response = self.client.post("/user/username", data={"username": "  kit "})
        self.assertEqual(response.status_code, 200)
        stored = self.db.collection("users").document("c").get().to_dict()
        self.assertEqual(stored["username"], "kit")

    def test_username_too_long(self) -> None:
        self.login("c")
        response = self.client.post("/user/username", data={"username": "x" * 16})
        self.assertEqual(response.status_code, 400)
        self.assertIn("Under 15 characters pls!", response.json["message"])

    def test_upload_profile_picture(self) -> None:
        self.login("c")
        response = self.client.post(
            "/user/profile_picture",
            data={"profile_picture": self.photo(make_image_bytes("PNG"), "me.png")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 200)
        url = response.json["profileImageURL"]
        self.assertEqual(url, self.bucket.url_for("profile_images/c.jpg"))
        stored = self.db.collection("users").document("c").get().to_dict()
        self.assertEqual(stored["profileImageURL"], url)

    def test_profile_picture_must_be_an_image(self) -> None:
        self.login("c")
        response = self.client.post(
            "/user/profile_picture",
            data={"profile_picture": self.photo(b"plain text", "me.png")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["message"], "Images only!")
        self.assertEqual(self.bucket.objects, {})

    def test_profile_picture_heic_is_refused_by_the_form(self) -> None:
        self.login("c")
        response = self.client.post(
            "/user/profile_picture",
            data={"profile_picture": self.photo(b"heic bytes", "me.heic")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.bucket.objects, {})

    def test_profile_picture_wrong_extension(self) -> None:
        self.login("c")
        response = self.client.post(
            "/user/profile_picture",
            data={"profile_picture": self.photo(b"", "notes.txt")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)

    def test_candidates(self) -> None:
        self.login("c")
        response = self.client.get("/user/candidates")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["uid"] for u in response.json["users"]], ["i1"])


if __name__ == "__main__":
    unittest.main()
