"""Data models for the user blueprint."""

from __future__ import annotations

from typing import TypedDict


class UserDocument(TypedDict, total=False):
    """A user document in Firestore, stored at ``users/{uid}``."""

    uid: str
    email: str
    username: str
    profileImageURL: str
