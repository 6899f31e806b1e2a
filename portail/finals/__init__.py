"""Finals brackets blueprint."""

from flask import Blueprint

bp = Blueprint("finals", __name__, url_prefix="/admin/finals")

from . import routes  # noqa: E402, F401
from .models import BracketMatch, BracketMatchPatch, CompetitionFinals  # noqa: E402
from .services import FINALS_VIEW, FinalsService, publish_finals  # noqa: E402

__all__ = [
    "FINALS_VIEW",
    "BracketMatch",
    "BracketMatchPatch",
    "CompetitionFinals",
    "FinalsService",
    "publish_finals",
    "routes",
]
