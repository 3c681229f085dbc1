"""Value types shared by the group-photo workflow.

These are immutable snapshots of Firestore documents. Converting from a
document never raises on a missing field: absent strings become ``""`` and
absent lists become empty tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from treehouse.core import constants as c


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _strings(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item if isinstance(item, str) else "" for item in value)


@dataclass(frozen=True)
class UserProfile:
    """A user's profile as stored at ``users/{uid}``."""

    uid: str
    username: str = ""
    profile_image_url: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, uid: str, data: dict[str, Any] | None) -> UserProfile:
        data = data or {}
        return cls(
            uid=uid,
            username=_text(data, c.USER_USERNAME),
            profile_image_url=_text(data, c.USER_PROFILE_IMAGE_URL),
            email=_text(data, c.USER_EMAIL),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            c.USER_UID: self.uid,
            c.USER_USERNAME: self.username,
            c.USER_PROFILE_IMAGE_URL: self.profile_image_url,
            c.USER_EMAIL: self.email,
        }


@dataclass(frozen=True)
class InvitedUser:
    """A candidate member picked while a group is being created."""

    uid: str
    profile_image_url: str = ""

    @classmethod
    def from_profile(cls, profile: UserProfile) -> InvitedUser:
        return cls(uid=profile.uid, profile_image_url=profile.profile_image_url)


@dataclass(frozen=True)
class Group:
    """One member's copy of a group document."""

    id: str
    group_name: str = ""
    members: tuple[str, ...] = ()
    members_uid: tuple[str, ...] = ()
    group_image_url: str = ""
    posted_uids: tuple[str, ...] = ()
    created_by: str = ""
    timestamp: Any = None

    @classmethod
    def from_dict(cls, group_id: str, data: dict[str, Any] | None) -> Group:
        data = data or {}
        return cls(
            id=group_id,
            group_name=_text(data, c.GROUP_NAME),
            members=_strings(data, c.GROUP_MEMBERS),
            members_uid=_strings(data, c.GROUP_MEMBERS_UID),
            group_image_url=_text(data, c.GROUP_IMAGE_URL),
            posted_uids=_strings(data, c.GROUP_POSTED_UIDS),
            created_by=_text(data, c.GROUP_CREATED_BY),
            timestamp=data.get(c.GROUP_TIMESTAMP),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the document payload (the id lives in the document path)."""
        return {
            c.GROUP_NAME: self.group_name,
            c.GROUP_MEMBERS: list(self.members),
            c.GROUP_MEMBERS_UID: list(self.members_uid),
            c.GROUP_IMAGE_URL: self.group_image_url,
            c.GROUP_POSTED_UIDS: list(self.posted_uids),
            c.GROUP_CREATED_BY: self.created_by,
            c.GROUP_TIMESTAMP: self.timestamp,
        }

    def member_pairs(self) -> list[tuple[str | None, str]]:
        """Pair each avatar with its uid; older documents carry no uids."""
        if len(self.members_uid) != len(self.members):
            return [(None, avatar) for avatar in self.members]
        return list(zip(self.members_uid, self.members))


@dataclass(frozen=True)
class Picture:
    """A captured photo recorded under ``users/{uid}/Picture``."""

    id: str
    uid: str = ""
    username: str = ""
    image_url: str = ""
    group_id: str = ""
    timestamp: Any = None

    @classmethod
    def from_dict(cls, picture_id: str, data: dict[str, Any] | None) -> Picture:
        data = data or {}
        return cls(
            id=picture_id,
            uid=_text(data, c.USER_UID),
            username=_text(data, c.USER_USERNAME),
            image_url=_text(data, c.PICTURE_IMAGE_URL),
            group_id=_text(data, c.PICTURE_GROUP_ID),
            timestamp=data.get(c.PICTURE_TIMESTAMP),
        )

