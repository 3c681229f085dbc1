"""The pictures blueprint."""

from flask import Blueprint

bp = Blueprint("pictures", __name__, url_prefix="/pictures")

from . import routes  # noqa: E402

__all__ = ["routes"]
