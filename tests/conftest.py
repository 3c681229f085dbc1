"""Common utilities for tests."""

import io
import unittest
from unittest.mock import MagicMock, patch

from PIL import Image

from treehouse import create_app
from tests.mock_utils import FakeBucket, mock_db, mock_storage

ROUTE_MODULES = [
    "treehouse",
    "treehouse.auth.routes",
    "treehouse.user.routes",
    "treehouse.group.routes",
    "treehouse.pictures.routes",
]


def make_image_bytes(fmt: str = "PNG", size: tuple = (8, 6), color: str = "red") -> bytes:
    """Encode a small solid image, for forms that expect a real photo."""
    out = io.BytesIO()
    Image.new("RGB", size, color).save(out, format=fmt)
    return out.getvalue()


class FirebaseRoutesTestCase(unittest.TestCase):
    """Runs the app against MockFirestore and an in-memory bucket."""

    config: dict = {}

    def setUp(self) -> None:
        self.db = mock_db()
        self.bucket = FakeBucket()
        self.mock_firestore_service = MagicMock()
        self.mock_firestore_service.client.return_value = self.db

        patchers = {
            module: patch(f"{module}.firestore", new=self.mock_firestore_service)
            for module in ROUTE_MODULES
        }
        patchers["init_app"] = patch("firebase_admin.initialize_app")
        patchers["storage"] = patch("treehouse.utils.storage", new=mock_storage(self.bucket))
        patchers["verify_id_token"] = patch("firebase_admin.auth.verify_id_token")

        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)

        self.app = create_app(
            {
                "TESTING": True,
                "WTF_CSRF_ENABLED": False,
                "SERVER_NAME": "localhost",
                "TASK_WORKERS": 1,
                "TASK_TIMEOUT": 5,
                **self.config,
            }
        )
        self.addCleanup(self.app.extensions["screen_tasks"].shutdown, wait=True)
        self.client = self.app.test_client()

    def login(self, uid: str) -> None:
        with self.client.session_transaction() as sess:
            sess["user_id"] = uid

    def photo(self, data: bytes = b"", filename: str = "photo.jpg") -> tuple:
        return (io.BytesIO(data or make_image_bytes("JPEG")), filename)
