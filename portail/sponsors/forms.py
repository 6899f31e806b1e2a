"""Forms for the sponsors admin."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import URL, DataRequired, Length, Optional


class SponsorForm(FlaskForm):
    """Add a sponsor."""

    name = StringField("Name", validators=[DataRequired(), Length(max=80)])
    logo_url = StringField("Logo URL", validators=[DataRequired(), URL()])
    website_url = StringField("Website", validators=[Optional(), URL()])
