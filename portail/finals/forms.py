"""Forms for the finals blueprint."""

from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, StringField
from wtforms.validators import NumberRange, Optional

from portail.core.constants import MATCH_STATUS_PENDING


class BracketMatchForm(FlaskForm):
    """Form for editing one bracket match.

    Team choices are filled in by the route from the registry.
    """

    team_a_id = SelectField("Team A", validators=[Optional()], validate_choice=False)
    team_b_id = SelectField("Team B", validators=[Optional()], validate_choice=False)
    score_a = IntegerField("Score A", validators=[Optional(), NumberRange(min=0)])
    score_b = IntegerField("Score B", validators=[Optional(), NumberRange(min=0)])
    date = StringField("Date", validators=[Optional()])
    status = SelectField(
        "Status",
        choices=[("pending", "Pending"), ("played", "Played")],
        default=MATCH_STATUS_PENDING,
    )

    def set_team_choices(self, teams):
        """Offer every registry team plus an empty "to be determined" option."""
        choices = [("", "To be determined")] + [(t["id"], t.get("name", "")) for t in teams]
        self.team_a_id.choices = choices
        self.team_b_id.choices = choices
