"""Tests for the pictures blueprint."""

import unittest

from tests.conftest import FirebaseRoutesTestCase, make_image_bytes
from tests.mock_utils import seed_user


class PicturesRoutesTestCase(FirebaseRoutesTestCase):
    def setUp(self) -> None:
        super().setUp()
        seed_user(self.db, "c", username="cat", avatar="c.jpg")
        self.login("c")

    def test_take_picture(self) -> None:
        response = self.client.post(
            "/pictures/",
            data={"photo": self.photo(b"jpeg-bytes")},
            content_type="multipart/form-data",
        )

        self.assertEqual(response.status_code, 201)
        picture = response.json["picture"]
        self.assertEqual(picture["uid"], "c")
        self.assertEqual(picture["username"], "cat")
        self.assertEqual(picture["groupId"], "")
        blob_path = f"pictures/c/{picture['id']}.jpg"
        self.assertEqual(self.bucket.objects[blob_path], b"jpeg-bytes")

        latest = self.client.get("/pictures/latest")
        self.assertEqual(latest.status_code, 200)
        self.assertEqual(latest.json["picture"]["imageURL"], picture["imageURL"])

    def test_latest_without_pictures(self) -> None:
        response = self.client.get("/pictures/latest")
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json["picture"])

    def test_take_picture_storage_down(self) -> None:
        self.bucket.fail_uploads = True
        response = self.client.post(
            "/pictures/",
            data={"photo": self.photo()},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json["status"], "error")

    def test_take_picture_rejects_png(self) -> None:
        response = self.client.post(
            "/pictures/",
            data={"photo": self.photo(make_image_bytes("PNG"), "photo.png")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.bucket.objects, {})

    def test_take_picture_rejects_other_files(self) -> None:
        response = self.client.post(
            "/pictures/",
            data={"photo": self.photo(b"hello", "notes.txt")},
            content_type="multipart/form-data",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json["message"], "Images only!")


if __name__ == "__main__":
    unittest.main()
