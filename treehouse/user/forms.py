"""Forms for the user blueprint."""

from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired
from wtforms import StringField
from wtforms.validators import DataRequired, Length

from treehouse.core.constants import PROFILE_IMAGE_EXTENSIONS, USERNAME_MAX_LENGTH


class UsernameForm(FlaskForm):
    """Form for choosing a username."""

    username = StringField(
        "Username",
        validators=[
            DataRequired(),
            Length(
                max=USERNAME_MAX_LENGTH,
                message=f"Under {USERNAME_MAX_LENGTH} characters pls!",
            ),
        ],
    )


class ProfilePictureForm(FlaskForm):
    """Form for uploading a profile photo."""

    profile_picture = FileField(
        "Upload a profile photo",
        validators=[
            FileRequired(),
            FileAllowed(PROFILE_IMAGE_EXTENSIONS, "Images only!"),
        ],
    )
