"""Utility functions for the application."""

from __future__ import annotations

from typing import Any, Callable

from firebase_admin import storage
from flask import current_app

from treehouse.core import constants as c


def picture_blob_path(uid: str, picture_id: str) -> str:
    return f"{c.PICTURES_BLOB_PREFIX}/{uid}/{picture_id}.jpg"


def profile_blob_path(uid: str) -> str:
    return f"{c.PROFILE_IMAGES_BLOB_PREFIX}/{uid}.jpg"


def upload_and_link(
    blob_path: str,
    image_bytes: bytes,
    link: Callable[[str], Any],
) -> str | None:
    """Upload ``image_bytes``, resolve its public URL, then ``link(url)``.

    The three calls run strictly in order and each only starts once the
    previous one succeeded. Any failure stops the chain, is logged, and
    ``None`` is returned. Nothing is rolled back: a blob uploaded before a
    failed link stays in the bucket unreferenced, and calling this again
    uploads the image again.
    """
    step = "uploading"
    try:
        blob = storage.bucket().blob(blob_path)
        blob.upload_from_string(image_bytes, content_type=c.IMAGE_CONTENT_TYPE)

        step = "publishing"
        blob.make_public()
        url = blob.public_url

        step = "linking"
        link(url)
        return url
    except Exception as e:
        current_app.logger.error(f"Error {step} picture {blob_path}: {e}")
        return None


def form_error_message(form, default: str) -> str:
    """Join a submitted form's validation errors into one message."""
    messages = [message for errors in form.errors.values() for message in errors]
    return "; ".join(str(m) for m in messages) or default
