"""Still-image capture and the shutter-to-URL photo session."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Protocol


class CaptureError(Exception):
    """Base class for capture failures."""

    pass


class CaptureUnavailable(CaptureError):
    """Raised when no capture session is running."""

    pass


class CaptureInProgress(CaptureError):
    """Raised when the shutter is pressed while a capture is still in flight."""

    pass


class CaptureSession(Protocol):
    """A running capture source held by the screen that owns the shutter."""

    @property
    def running(self) -> bool: ...

    def capture(self) -> bytes: ...


class UploadedStillCapture:
    """A capture session over a still image the client already took.

    The device camera lives on the client; the server sees one JPEG per
    request. Each instance yields its image once.
    """

    def __init__(self, image_bytes: bytes) -> None:
        self._image: Optional[bytes] = image_bytes or None

    @property
    def running(self) -> bool:
        return self._image is not None

    def capture(self) -> bytes:
        if self._image is None:
            raise CaptureUnavailable("No image is available to capture.")
        image, self._image = self._image, None
        return image


class CaptureGuard:
    """Allows one in-flight capture per key (normally the user's uid)."""

    def __init__(self) -> None:
        self._held: set[str] = set()
        self._lock = threading.Lock()

    def is_held(self, key: str) -> bool:
        with self._lock:
            return key in self._held

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._lock:
            if key in self._held:
                raise CaptureInProgress("A photo is already being captured.")
            self._held.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._held.discard(key)


class PhotoSession:
    """One press of the shutter: capture a still and hand it to ``upload``.

    ``upload`` receives the image bytes and returns what it linked, or
    ``None`` if the upload-and-link chain failed. The session is built with
    the capture handle it uses; nothing looks the camera up later.
    """

    def __init__(
        self,
        capture: CaptureSession,
        upload: Callable[[bytes], Any],
        guard: CaptureGuard,
        owner: str,
    ) -> None:
        self.capture_session = capture
        self._upload = upload
        self._guard = guard
        self._owner = owner

    def press_shutter(self) -> Any:
        if not self.capture_session.running:
            raise CaptureUnavailable("The capture session is not running.")
        with self._guard.hold(self._owner):
            image = self.capture_session.capture()
            return self._upload(image)
