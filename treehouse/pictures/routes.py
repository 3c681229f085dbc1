"""Routes for the pictures blueprint."""

from firebase_admin import firestore
from flask import current_app, g, jsonify

from treehouse.auth.decorators import login_required
from treehouse.errors import UpstreamError, ValidationError
from treehouse.extensions import capture_guard
from treehouse.utils import form_error_message
from treehouse.workflow import PhotoSession, UploadedStillCapture, UserProfile

from . import bp
from .forms import PhotoForm
from .services import get_latest_picture, save_personal_picture


def picture_json(picture):
    return {
        "id": picture.id,
        "uid": picture.uid,
        "username": picture.username,
        "imageURL": picture.image_url,
        "groupId": picture.group_id,
    }


@bp.route("/", methods=["POST"])
@login_required
def take_picture():
    """Add the captured still to the user's own photo history."""
    form = PhotoForm()
    if not form.validate_on_submit():
        raise ValidationError(form_error_message(form, "A photo is required."))

    db = firestore.client()
    profile = UserProfile.from_dict(g.user["uid"], g.user)
    session = PhotoSession(
        UploadedStillCapture(form.photo.data.read()),
        lambda image: save_personal_picture(db, profile, image),
        capture_guard,
        owner=profile.uid,
    )
    picture = session.press_shutter()
    if picture is None:
        raise UpstreamError("Your photo could not be uploaded. Please try again.")

    current_app.logger.info(f"User {profile.uid} saved picture {picture.id}.")
    return jsonify({"status": "success", "picture": picture_json(picture)}), 201


@bp.route("/latest", methods=["GET"])
@login_required
def latest_picture():
    """Return the user's most recent photo."""
    db = firestore.client()
    picture = get_latest_picture(db, g.user["uid"])
    return jsonify({"picture": picture_json(picture) if picture else None})
