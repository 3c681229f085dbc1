"""Forms for the group blueprint."""

from flask_wtf import FlaskForm
from wtforms import SelectMultipleField, StringField


class GroupForm(FlaskForm):
    """Form for creating a new group.

    The name may be empty. ``invitees`` choices are filled in by the view
    from the profiles that exist.
    """

    groupName = StringField("Group Name")
    invitees = SelectMultipleField("Invitees", choices=[])
