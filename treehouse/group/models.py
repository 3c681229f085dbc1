"""Data models for the group blueprint."""

from __future__ import annotations

from typing import Any, TypedDict


class GroupDocument(TypedDict, total=False):
    """One member's copy of a group, stored at ``users/{uid}/groups/{groupId}``.

    Every member holds a document with the same id and the same content as
    written at creation time.
    """

    groupName: str
    members: list[str]
    membersUID: list[str]
    groupImageURL: str
    postedUIDs: list[str]
    createdBy: str
    timestamp: Any
