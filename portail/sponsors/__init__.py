"""Sponsors blueprints."""

from flask import Blueprint

bp = Blueprint("sponsors", __name__)
admin_bp = Blueprint("sponsors_admin", __name__, url_prefix="/admin/sponsors")

from . import routes  # noqa: E402, F401
from .services import SPONSORS_VIEW, SponsorService, publish_sponsors  # noqa: E402

__all__ = ["SPONSORS_VIEW", "SponsorService", "publish_sponsors", "routes"]
