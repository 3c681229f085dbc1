"""Data models for the pictures blueprint."""

from __future__ import annotations

from typing import Any, TypedDict


class PictureDocument(TypedDict, total=False):
    """A picture document in Firestore, stored at ``users/{uid}/Picture/{id}``."""

    uid: str
    username: str
    imageURL: str
    groupId: str
    timestamp: Any
