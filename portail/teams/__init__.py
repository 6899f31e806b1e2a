"""Blueprint for the team registry."""

from flask import Blueprint

bp = Blueprint(
    "teams",
    __name__,
    url_prefix="/admin/teams",
)

from . import routes  # noqa: E402, F401
from .models import Team, TeamPatch  # noqa: E402
from .services import TEAMS_VIEW, TeamDirectory, TeamService  # noqa: E402

__all__ = ["TEAMS_VIEW", "Team", "TeamDirectory", "TeamPatch", "TeamService", "routes"]
