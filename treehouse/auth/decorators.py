"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g, jsonify, session


def login_required(f):
    """Answer 401 without running the view if nobody is signed in.

    Usage:
    @login_required
    def protected_view():
        ...
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session or not g.get("user"):
            return (
                jsonify({"status": "error", "message": "Sign in to continue."}),
                401,
            )
        return f(*args, **kwargs)

    return decorated_function
