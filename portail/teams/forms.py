"""Forms for the teams blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import URL, DataRequired, Length


class TeamForm(FlaskForm):
    """Form to create or edit a registry team."""

    name = StringField("Name", validators=[DataRequired(), Length(min=2, max=80)])
    logo_url = StringField(
        "Logo URL", validators=[DataRequired(), URL(message="Enter a valid image URL.")]
    )
    submit = SubmitField("Save")
