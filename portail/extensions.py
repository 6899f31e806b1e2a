"""Flask extensions for the application."""

from flask import current_app
from flask_wtf.csrf import CSRFProtect

from .core.cache import ListCache

csrf = CSRFProtect()

CACHES_KEY = "portail.caches"
CACHED_COLLECTIONS = ("teams",)


def init_caches(app):
    """Attach one empty listing cache per cached collection to the app."""
    app.extensions[CACHES_KEY] = {name: ListCache(name) for name in CACHED_COLLECTIONS}


def get_cache(name):
    """Return the app-owned cache for a collection."""
    return current_app.extensions[CACHES_KEY][name]
