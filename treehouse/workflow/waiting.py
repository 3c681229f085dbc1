"""Who a group is still waiting on."""

from __future__ import annotations

from .models import Group


def waiting_on(members: list[str] | tuple[str, ...], viewer_avatar: str | None) -> list[str]:
    """Return ``members`` without the viewer's own avatar.

    ``viewer_avatar`` is ``None`` until the viewer's profile has loaded, in which
    case every member is returned. Members sharing the viewer's avatar URL
    (for example two members with no profile photo) are removed together.
    """
    if viewer_avatar is None:
        return list(members)
    return [avatar for avatar in members if avatar != viewer_avatar]


def pending_members(group: Group) -> list[str]:
    """Return the avatars of members who have not posted to ``group`` yet."""
    posted = set(group.posted_uids)
    return [avatar for uid, avatar in group.member_pairs() if uid is None or uid not in posted]


def waiting_list(group: Group, viewer_avatar: str | None) -> list[str]:
    """Members still expected to post, as seen by the viewer."""
    return waiting_on(pending_members(group), viewer_avatar)
