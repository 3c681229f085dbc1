"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask, current_app, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import MAX_INVITEES, PROFILE_IMAGE_QUALITY
from .extensions import csrf, screen_tasks


def _env_flag(name, default):
    return (os.environ.get(name) or default).lower() in ["true", "1", "t"]


def _load_credentials(app):
    """Return ``(credential, project_id)`` from the first source that works.

    Sources are tried in order: the ``FIREBASE_CREDENTIALS_JSON`` variable, a
    ``firebase_credentials.json`` beside the package, then application default
    credentials.
    """
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            info = json.loads(cred_json)
            return credentials.Certificate(info), info.get("project_id")
        except ValueError as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    cred_path = os.path.join(
        os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
    )
    if os.path.exists(cred_path):
        try:
            with open(cred_path) as f:
                info = json.load(f)
            return credentials.Certificate(cred_path), info.get("project_id")
        except ValueError as e:
            app.logger.error(f"Error loading credentials from {cred_path}: {e}")

    try:
        return credentials.ApplicationDefault(), os.environ.get("FIREBASE_PROJECT_ID")
    except Exception as e:
        app.logger.error(f"No usable Firebase credentials: {e}")
        return None, None


def _init_firebase(app):
    """Initialize the Firebase Admin SDK with the default storage bucket."""
    cred, project_id = _load_credentials(app)
    if cred is None or firebase_admin._apps:
        return

    options = {"storageBucket": app.config["FIREBASE_STORAGE_BUCKET"]}
    if project_id:
        options["projectId"] = project_id
        options["storageBucket"] = (
            options["storageBucket"] or f"{project_id}.firebasestorage.app"
        )
    try:
        firebase_admin.initialize_app(cred, options)
    except ValueError:
        app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    task_timeout = os.environ.get("TASK_TIMEOUT")
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_STORAGE_BUCKET=os.environ.get("FIREBASE_STORAGE_BUCKET"),
        GROUP_PHOTO_FANOUT=_env_flag("GROUP_PHOTO_FANOUT", "true"),
        PROFILE_IMAGE_QUALITY=int(
            os.environ.get("PROFILE_IMAGE_QUALITY") or PROFILE_IMAGE_QUALITY
        ),
        MAX_INVITEES=int(os.environ.get("MAX_INVITEES") or MAX_INVITEES),
        TASK_WORKERS=int(os.environ.get("TASK_WORKERS") or 4),
        TASK_TIMEOUT=float(task_timeout) if task_timeout else None,
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    # Initialize extensions
    csrf.init_app(app)
    screen_tasks.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import user as user_bp

    app.register_blueprint(user_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import pictures as pictures_bp

    app.register_blueprint(pictures_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    from .user.services import get_user_profile

    @app.before_request
    def load_logged_in_user():
        """Put the signed-in user's profile in ``g.user``, or ``None``."""
        g.user = None
        uid = session.get("user_id")
        if uid is None:
            return

        try:
            profile = get_user_profile(firestore.client(), uid)
        except Exception as e:
            current_app.logger.error(f"Error loading user {uid} from session: {e}")
            session.clear()
            return
        if profile is None:
            current_app.logger.warning(f"User {uid} in session has no profile.")
            session.clear()
            return
        g.user = profile.to_dict()

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
