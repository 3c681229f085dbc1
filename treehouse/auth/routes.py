from firebase_admin import auth, firestore
from flask import current_app, jsonify, request, session
from flask_wtf.csrf import generate_csrf

from treehouse.user.services import ensure_user_profile

from . import bp


@bp.route("/session_login", methods=["POST"])
def session_login():
    """
    This endpoint is called from the client after a successful Firebase sign-in.
    It receives the ID token, verifies it, and creates a server-side session.
    The first sign-in also creates the user's profile document.
    """
    id_token = (request.get_json(silent=True) or {}).get("idToken")
    if not id_token:
        return jsonify({"status": "error", "message": "Missing idToken."}), 400
    try:
        decoded_token = auth.verify_id_token(id_token)
    except Exception as e:
        current_app.logger.error(f"Error during session login: {e}")
        return jsonify({"status": "error", "message": "Invalid token."}), 401

    uid = decoded_token["uid"]
    db = firestore.client()
    profile, created = ensure_user_profile(db, uid, decoded_token.get("email", ""))
    if profile is None:
        return (
            jsonify({"status": "error", "message": "Could not load your profile."}),
            502,
        )

    session.clear()
    session["user_id"] = uid
    return jsonify(
        {"status": "success", "created": created, "user": profile.to_dict()}
    )


@bp.route("/logout")
def logout():
    """
    The actual sign-out is handled by the Firebase client SDK.
    This route clears the server-side session.
    """
    session.clear()
    return jsonify({"status": "success"})


@bp.route("/csrf-token")
def csrf_token():
    """Return a CSRF token for API clients to send as X-CSRFToken."""
    return jsonify({"token": generate_csrf()})
