"""The group-photo workflow, free of Flask and Firebase."""

from .camera import (
    CaptureError,
    CaptureGuard,
    CaptureInProgress,
    CaptureUnavailable,
    PhotoSession,
    UploadedStillCapture,
)
from .models import Group, InvitedUser, Picture, UserProfile
from .selection import InviteSelection
from .state import (
    AppState,
    GroupCreated,
    GroupLoaded,
    GroupPhotoUpdated,
    GroupsLoaded,
    InviteeSelected,
    InviteeToggled,
    PictureSaved,
    ProfileLoaded,
    Store,
    project_group_view,
    project_home,
    reduce,
)
from .tasks import ScreenScope
from .waiting import pending_members, waiting_list, waiting_on

__all__ = [
    "AppState",
    "CaptureError",
    "CaptureGuard",
    "CaptureInProgress",
    "CaptureUnavailable",
    "Group",
    "GroupCreated",
    "GroupLoaded",
    "GroupPhotoUpdated",
    "GroupsLoaded",
    "InviteSelection",
    "InvitedUser",
    "InviteeSelected",
    "InviteeToggled",
    "PhotoSession",
    "Picture",
    "PictureSaved",
    "ProfileLoaded",
    "ScreenScope",
    "Store",
    "UploadedStillCapture",
    "UserProfile",
    "pending_members",
    "project_group_view",
    "project_home",
    "reduce",
    "waiting_list",
    "waiting_on",
]
