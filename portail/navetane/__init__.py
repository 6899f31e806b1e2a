"""Navetane blueprints: the public league page and its admin console."""

from flask import Blueprint

bp = Blueprint("navetane", __name__, url_prefix="/navetane")
admin_bp = Blueprint("navetane_admin", __name__, url_prefix="/admin/navetane")

from . import routes  # noqa: E402, F401
from .models import Poule, PouleStats, PouleTeamRecord  # noqa: E402
from .services import NAVETANE_VIEW, NavetaneService, publish_navetane  # noqa: E402
from .standings import compute_standings, qualified_count_for  # noqa: E402

__all__ = [
    "NAVETANE_VIEW",
    "NavetaneService",
    "Poule",
    "PouleStats",
    "PouleTeamRecord",
    "compute_standings",
    "publish_navetane",
    "qualified_count_for",
    "routes",
]
