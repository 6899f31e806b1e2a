"""Forms for the Navetane admin."""

from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional

from .models import PouleStats


class PouleForm(FlaskForm):
    """Create or rename a poule."""

    name = StringField("Poule name", validators=[DataRequired()])
    qualified_count = IntegerField(
        "Qualified teams", validators=[Optional(), NumberRange(min=0)]
    )


class PouleTeamForm(FlaskForm):
    """Add a registry team to a poule, or edit its line in the table."""

    team_id = SelectField("Team", validators=[DataRequired()], validate_choice=False)
    pts = IntegerField("Pts", validators=[Optional()], default=0)
    mj = IntegerField("Played", validators=[Optional(), NumberRange(min=0)], default=0)
    g = IntegerField("Won", validators=[Optional(), NumberRange(min=0)], default=0)
    n = IntegerField("Drawn", validators=[Optional(), NumberRange(min=0)], default=0)
    p = IntegerField("Lost", validators=[Optional(), NumberRange(min=0)], default=0)
    bp = IntegerField("Goals for", validators=[Optional(), NumberRange(min=0)])
    bc = IntegerField("Goals against", validators=[Optional(), NumberRange(min=0)])
    diff = IntegerField("Goal difference", validators=[Optional()])

    def set_team_choices(self, teams):
        """Offer every registry team."""
        self.team_id.choices = [(t["id"], t.get("name", "")) for t in teams]

    def to_stats(self):
        """Collect the statistics entered in the form."""
        return PouleStats(
            pts=self.pts.data or 0,
            mj=self.mj.data or 0,
            g=self.g.data or 0,
            n=self.n.data or 0,
            p=self.p.data or 0,
            bp=self.bp.data,
            bc=self.bc.data,
            diff=self.diff.data,
        )


class CoupeMatchForm(FlaskForm):
    """Create or edit a cup fixture."""

    team_a = StringField("Team A", validators=[DataRequired()])
    team_b = StringField("Team B", validators=[DataRequired()])


class PreliminaryMatchForm(FlaskForm):
    """Edit the preliminary match."""

    team_a = StringField("Team A", validators=[DataRequired()])
    team_b = StringField("Team B", validators=[DataRequired()])
    winner_plays_against = StringField("Winner plays against", validators=[DataRequired()])
