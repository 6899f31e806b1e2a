"""Navetane statistics blueprints: the public page and its admin console."""

from flask import Blueprint

bp = Blueprint("stats", __name__, url_prefix="/statistiques")
admin_bp = Blueprint("stats_admin", __name__, url_prefix="/admin/stats")

from . import routes  # noqa: E402, F401
from .models import NavetaneStats, PlayerRank, StatsMatch  # noqa: E402
from .services import STATS_VIEW, StatsService, publish_stats  # noqa: E402

__all__ = [
    "STATS_VIEW",
    "NavetaneStats",
    "PlayerRank",
    "StatsMatch",
    "StatsService",
    "publish_stats",
    "routes",
]
