"""Forms for the statistics admin."""

from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional

from .models import make_player_rank, make_stats_match


class PlayerRankForm(FlaskForm):
    """Add a player to a ranking. Team choices are filled in by the route."""

    name = StringField("Player", validators=[DataRequired()])
    team_id = SelectField("Team", validators=[Optional()], validate_choice=False)
    points = IntegerField("Points", validators=[Optional(), NumberRange(min=0)], default=0)

    def set_team_choices(self, teams):
        self.team_id.choices = [("", "No team")] + [(t["id"], t.get("name", "")) for t in teams]

    def to_player(self):
        return make_player_rank(self.name.data, self.team_id.data or "", self.points.data or 0)


class StatsMatchForm(FlaskForm):
    """Add a played or upcoming fixture."""

    team_a = StringField("Team A", validators=[DataRequired()])
    team_b = StringField("Team B", validators=[DataRequired()])
    score_a = IntegerField("Score A", validators=[Optional(), NumberRange(min=0)])
    score_b = IntegerField("Score B", validators=[Optional(), NumberRange(min=0)])
    date = StringField("Date", validators=[Optional()])
    poule = StringField("Poule / competition", validators=[Optional()])
    stadium = StringField("Stadium", validators=[Optional()])
    time1 = StringField("First kick-off", validators=[Optional()])
    time2 = StringField("Second kick-off", validators=[Optional()])

    def to_match(self):
        return make_stats_match(
            self.team_a.data,
            self.team_b.data,
            self.score_a.data,
            self.score_b.data,
            date=self.date.data,
            poule=self.poule.data,
            stadium=self.stadium.data,
            time1=self.time1.data,
            time2=self.time2.data,
        )
