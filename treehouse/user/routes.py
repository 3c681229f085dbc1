"""Routes for the user blueprint."""

from firebase_admin import firestore
from flask import current_app, g, jsonify, request

from treehouse.auth.decorators import login_required
from treehouse.errors import UpstreamError, ValidationError
from treehouse.utils import form_error_message
from treehouse.workflow import UserProfile

from . import bp
from .forms import ProfilePictureForm, UsernameForm
from .services import get_candidates, set_username, upload_profile_picture


@bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the signed-in user's profile."""
    return jsonify({"user": UserProfile.from_dict(g.user["uid"], g.user).to_dict()})


@bp.route("/username", methods=["POST"])
@login_required
def update_username():
    form = UsernameForm()
    if not form.validate_on_submit():
        raise ValidationError(form_error_message(form, "A username is required."))

    db = firestore.client()
    uid = g.user["uid"]
    username = form.username.data.strip()
    if not set_username(db, uid, username):
        raise UpstreamError("Your username could not be saved. Please try again.")
    return jsonify({"status": "success", "username": username})


@bp.route("/profile_picture", methods=["POST"])
@login_required
def update_profile_picture():
    """Re-encode an uploaded photo and make it the user's avatar."""
    form = ProfilePictureForm()
    if not form.validate_on_submit():
        raise ValidationError(form_error_message(form, "Images only!"))

    db = firestore.client()
    uid = g.user["uid"]
    url = upload_profile_picture(
        db,
        uid,
        form.profile_picture.data.read(),
        current_app.config["PROFILE_IMAGE_QUALITY"],
    )
    if url is None:
        raise UpstreamError("Your profile photo could not be uploaded. Please try again.")

    current_app.logger.info(f"User {uid} updated their profile photo.")
    return jsonify({"status": "success", "profileImageURL": url})


@bp.route("/candidates", methods=["GET"])
@login_required
def candidates():
    """People the user can invite to a new group."""
    db = firestore.client()
    limit = request.args.get("limit", 50, type=int)
    users = get_candidates(db, g.user["uid"], limit=max(1, min(limit, 100)))
    return jsonify(
        {
            "users": [
                {"uid": u.uid, "username": u.username, "profileImageURL": u.profile_image_url}
                for u in users
            ]
        }
    )
