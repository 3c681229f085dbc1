"""Routes for the group blueprint."""

from firebase_admin import firestore
from flask import current_app, g, jsonify

from treehouse.auth.decorators import login_required
from treehouse.errors import NotFoundError, UpstreamError, ValidationError
from treehouse.extensions import capture_guard, screen_tasks
from treehouse.pictures.forms import PhotoForm
from treehouse.pictures.services import get_latest_picture
from treehouse.user.services import get_invitees, get_user_profile
from treehouse.utils import form_error_message
from treehouse.workflow import (
    GroupCreated,
    GroupLoaded,
    GroupPhotoUpdated,
    GroupsLoaded,
    InviteeSelected,
    InviteSelection,
    PhotoSession,
    PictureSaved,
    ProfileLoaded,
    UploadedStillCapture,
    UserProfile,
    project_group_view,
    project_home,
)

from . import bp
from .forms import GroupForm
from .services import GroupService


def _profile_loaded(profile):
    return ProfileLoaded(profile) if profile else None


@bp.route("/", methods=["GET"])
@login_required
def view_groups():
    """The home screen: the user's profile and every group they belong to."""
    db = firestore.client()
    uid = g.user["uid"]
    scope = screen_tasks.open_scope(uid)
    scope.submit(get_user_profile, db, uid, to_action=_profile_loaded)
    scope.submit(
        GroupService.list_groups,
        db,
        uid,
        to_action=lambda groups: GroupsLoaded(tuple(groups)),
    )
    store = scope.wait(current_app.config["TASK_TIMEOUT"])
    return jsonify(project_home(store.state))


@bp.route("/", methods=["POST"])
@login_required
def create_group():
    """Create a group with up to MAX_INVITEES other members."""
    db = firestore.client()
    uid = g.user["uid"]
    form = GroupForm()
    requested = [u for u in (form.invitees.data or []) if u]
    resolved = get_invitees(db, requested)
    form.invitees.choices = [(i.uid, i.uid) for i in resolved]
    # Listing yourself is allowed and ignored.
    invitees = [i for i in resolved if i.uid != uid]
    if not form.validate_on_submit():
        raise ValidationError(form_error_message(form, "Invalid group."))

    store = screen_tasks.open_scope(
        uid,
        selection=InviteSelection(
            creator_uid=uid, cap=current_app.config["MAX_INVITEES"]
        ),
    ).store
    for invitee in invitees:
        store.dispatch(InviteeSelected(invitee))
    selection = store.state.selection
    refused = [i.uid for i in invitees if i.uid not in selection]
    if refused:
        current_app.logger.warning(
            f"Selection for {uid} is capped; not inviting {refused}."
        )

    group = GroupService.create_group(db, selection, form.groupName.data or "")
    if group is None:
        raise UpstreamError("The group could not be created. Please try again.")

    state = store.dispatch(GroupCreated(group))
    view = project_home(state)
    return (
        jsonify(
            {
                "status": "success",
                "group": view["groups"][0],
                "refused": refused,
            }
        ),
        201,
    )


@bp.route("/<string:group_id>", methods=["GET"])
@login_required
def view_group(group_id):
    """A group's screen: its photo, members, and who it is still waiting on."""
    db = firestore.client()
    uid = g.user["uid"]
    scope = screen_tasks.open_scope(uid)
    scope.submit(get_user_profile, db, uid, to_action=_profile_loaded)
    group_future = scope.submit(
        GroupService.get_group,
        db,
        uid,
        group_id,
        to_action=lambda group: GroupLoaded(group) if group else None,
    )
    scope.submit(
        get_latest_picture,
        db,
        uid,
        to_action=lambda picture: PictureSaved(picture) if picture else None,
    )
    store = scope.wait(current_app.config["TASK_TIMEOUT"])
    if group_future.done() and group_future.result() is None:
        raise NotFoundError("Group not found.")
    return jsonify(project_group_view(store.state))


@bp.route("/<string:group_id>/photo", methods=["POST"])
@login_required
def share_photo(group_id):
    """Capture a photo and make it the group's current image."""
    form = PhotoForm()
    if not form.validate_on_submit():
        raise ValidationError(form_error_message(form, "A photo is required."))

    db = firestore.client()
    profile = UserProfile.from_dict(g.user["uid"], g.user)
    group = GroupService.get_group(db, profile.uid, group_id)
    if group is None:
        raise NotFoundError("Group not found.")

    session = PhotoSession(
        UploadedStillCapture(form.photo.data.read()),
        lambda image: GroupService.share_photo(
            db, group, profile, image, current_app.config["GROUP_PHOTO_FANOUT"]
        ),
        capture_guard,
        owner=profile.uid,
    )
    url = session.press_shutter()
    if url is None:
        raise UpstreamError("Your photo could not be shared. Please try again.")

    store = screen_tasks.open_scope(profile.uid).store
    store.dispatch(ProfileLoaded(profile))
    store.dispatch(GroupLoaded(group))
    state = store.dispatch(GroupPhotoUpdated(group_id, url, profile.uid))
    return jsonify({"status": "success", **project_group_view(state)}), 201
