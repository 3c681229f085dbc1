"""Tests for capture handles and the shutter."""

import threading
import unittest
from unittest.mock import MagicMock

from treehouse.workflow import (
    CaptureGuard,
    CaptureInProgress,
    CaptureUnavailable,
    PhotoSession,
    UploadedStillCapture,
)


class UploadedStillCaptureTestCase(unittest.TestCase):
    def test_yields_image_once(self) -> None:
        capture = UploadedStillCapture(b"jpeg")
        self.assertTrue(capture.running)
        self.assertEqual(capture.capture(), b"jpeg")
        self.assertFalse(capture.running)
        with self.assertRaises(CaptureUnavailable):
            capture.capture()

    def test_empty_image_is_not_running(self) -> None:
        self.assertFalse(UploadedStillCapture(b"").running)


class PhotoSessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.guard = CaptureGuard()

    def test_shutter_uploads_captured_bytes(self) -> None:
        upload = MagicMock(return_value="https://example.com/p.jpg")
        session = PhotoSession(UploadedStillCapture(b"jpeg"), upload, self.guard, "c")
        self.assertEqual(session.press_shutter(), "https://example.com/p.jpg")
        upload.assert_called_once_with(b"jpeg")
        self.assertFalse(self.guard.is_held("c"))

    def test_failed_upload_returns_none(self) -> None:
        session = PhotoSession(
            UploadedStillCapture(b"jpeg"), lambda image: None, self.guard, "c"
        )
        self.assertIsNone(session.press_shutter())

    def test_not_running_never_uploads(self) -> None:
        upload = MagicMock()
        session = PhotoSession(UploadedStillCapture(b""), upload, self.guard, "c")
        with self.assertRaises(CaptureUnavailable):
            session.press_shutter()
        upload.assert_not_called()

    def test_second_press_while_in_flight_is_refused(self) -> None:
        in_upload = threading.Event()
        release = threading.Event()

        def slow_upload(image):
            in_upload.set()
            release.wait(5)
            return "url"

        first = PhotoSession(UploadedStillCapture(b"one"), slow_upload, self.guard, "c")
        second_upload = MagicMock()
        second = PhotoSession(UploadedStillCapture(b"two"), second_upload, self.guard, "c")

        results = []
        worker = threading.Thread(target=lambda: results.append(first.press_shutter()))
        worker.start()
        self.assertTrue(in_upload.wait(5))
        try:
            with self.assertRaises(CaptureInProgress):
                second.press_shutter()
        finally:
            release.set()
            worker.join(5)

        self.assertEqual(results, ["url"])
        second_upload.assert_not_called()

    def test_other_users_are_not_blocked(self) -> None:
        with self.guard.hold("c"):
            session = PhotoSession(
                UploadedStillCapture(b"jpeg"), lambda image: "url", self.guard, "i1"
            )
            self.assertEqual(session.press_shutter(), "url")

    def test_guard_is_released_after_failure(self) -> None:
        def broken(image):
            raise RuntimeError("disk full")

        session = PhotoSession(UploadedStillCapture(b"jpeg"), broken, self.guard, "c")
        with self.assertRaises(RuntimeError):
            session.press_shutter()
        self.assertFalse(self.guard.is_held("c"))


if __name__ == "__main__":
    unittest.main()
