"""Articles blueprints: admin management and public poll voting."""

from flask import Blueprint

bp = Blueprint("articles", __name__, url_prefix="/articles")
admin_bp = Blueprint("articles_admin", __name__, url_prefix="/admin/articles")

from . import routes  # noqa: E402, F401
from .models import Article, Poll  # noqa: E402
from .services import ArticleService  # noqa: E402

__all__ = ["Article", "ArticleService", "Poll", "routes"]
