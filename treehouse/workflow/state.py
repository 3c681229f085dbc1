"""Application state for a screen and the actions that update it.

State is only ever replaced through :func:`reduce`; screens read it through
the ``project_*`` functions, which are pure.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, Union

from .models import Group, InvitedUser, Picture, UserProfile
from .selection import InviteSelection
from .waiting import pending_members, waiting_list


@dataclass(frozen=True)
class AppState:
    """Everything a screen knows about the signed-in user."""

    uid: str
    profile: UserProfile | None = None
    groups: tuple[Group, ...] = ()
    group: Group | None = None
    latest_picture: Picture | None = None
    selection: InviteSelection | None = None


@dataclass(frozen=True)
class ProfileLoaded:
    profile: UserProfile


@dataclass(frozen=True)
class GroupsLoaded:
    groups: tuple[Group, ...]


@dataclass(frozen=True)
class GroupLoaded:
    group: Group


@dataclass(frozen=True)
class GroupCreated:
    group: Group


@dataclass(frozen=True)
class GroupPhotoUpdated:
    group_id: str
    image_url: str
    poster_uid: str


@dataclass(frozen=True)
class PictureSaved:
    picture: Picture


@dataclass(frozen=True)
class InviteeSelected:
    invitee: InvitedUser


@dataclass(frozen=True)
class InviteeToggled:
    invitee: InvitedUser


Action = Union[
    ProfileLoaded,
    GroupsLoaded,
    GroupLoaded,
    GroupCreated,
    GroupPhotoUpdated,
    PictureSaved,
    InviteeSelected,
    InviteeToggled,
]


def _with_photo(group: Group, action: GroupPhotoUpdated) -> Group:
    if group.id != action.group_id:
        return group
    posted = group.posted_uids
    if action.poster_uid not in posted:
        posted = posted + (action.poster_uid,)
    return replace(group, group_image_url=action.image_url, posted_uids=posted)


def reduce(state: AppState, action: Action) -> AppState:  # noqa: PLR0911
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, ProfileLoaded):
        return replace(state, profile=action.profile)
    if isinstance(action, GroupsLoaded):
        return replace(state, groups=tuple(action.groups))
    if isinstance(action, GroupLoaded):
        return replace(state, group=action.group)
    if isinstance(action, GroupCreated):
        others = tuple(g for g in state.groups if g.id != action.group.id)
        return replace(state, groups=(action.group,) + others, group=action.group, selection=None)
    if isinstance(action, GroupPhotoUpdated):
        return replace(
            state,
            groups=tuple(_with_photo(g, action) for g in state.groups),
            group=_with_photo(state.group, action) if state.group else None,
        )
    if isinstance(action, PictureSaved):
        return replace(state, latest_picture=action.picture)
    if isinstance(action, (InviteeSelected, InviteeToggled)):
        selection = state.selection
        if selection is None:
            selection = InviteSelection(creator_uid=state.uid)
        if isinstance(action, InviteeSelected):
            selection = selection.select(action.invitee)
        else:
            selection = selection.toggle(action.invitee)
        return replace(state, selection=selection)
    raise TypeError(f"Unknown action: {action!r}")


class Store:
    """Holds an :class:`AppState` and serialises dispatched actions."""

    def __init__(self, state: AppState) -> None:
        self._state = state
        self._lock = threading.Lock()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        with self._lock:
            self._state = reduce(self._state, action)
            return self._state


def _group_summary(group: Group) -> dict[str, Any]:
    return {
        "id": group.id,
        "groupName": group.group_name,
        "members": list(group.members),
        "membersUID": list(group.members_uid),
        "groupImageURL": group.group_image_url,
    }


def project_profile(state: AppState) -> dict[str, Any] | None:
    if state.profile is None:
        return None
    return state.profile.to_dict()


def project_home(state: AppState) -> dict[str, Any]:
    """Projection for the home screen: the user and their groups."""
    return {
        "user": project_profile(state),
        "groups": [_group_summary(g) for g in state.groups],
    }


def project_group_view(state: AppState) -> dict[str, Any]:
    """Projection for a group screen.

    Renders whatever has loaded so far: the group without the profile, or the
    profile without the group, are both valid states.
    """
    viewer_avatar = state.profile.profile_image_url if state.profile else None
    view: dict[str, Any] = {
        "user": project_profile(state),
        "group": None,
        "waitingOn": [],
        "pending": [],
        "hasPosted": False,
        "latestPicture": None,
    }
    if state.group is not None:
        view["group"] = _group_summary(state.group)
        view["waitingOn"] = waiting_list(state.group, viewer_avatar)
        view["pending"] = pending_members(state.group)
        view["hasPosted"] = state.uid in state.group.posted_uids
    if state.latest_picture is not None:
        view["latestPicture"] = {
            "id": state.latest_picture.id,
            "imageURL": state.latest_picture.image_url,
            "username": state.latest_picture.username,
            "groupId": state.latest_picture.group_id,
        }
    return view
