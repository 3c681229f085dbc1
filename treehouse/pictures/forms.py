"""Forms for the pictures blueprint."""

from flask_wtf import FlaskForm
from flask_wtf.file import FileAllowed, FileField, FileRequired

from treehouse.core.constants import PHOTO_EXTENSIONS


class PhotoForm(FlaskForm):
    """Form carrying one captured still image."""

    photo = FileField(
        "Photo",
        validators=[
            FileRequired(),
            FileAllowed(PHOTO_EXTENSIONS, "Images only!"),
        ],
    )
