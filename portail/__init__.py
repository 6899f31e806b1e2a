"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask, redirect, url_for
from werkzeug.middleware.proxy_fix import ProxyFix

from .core.constants import DEFAULT_QUALIFIED_COUNT
from .extensions import csrf, init_caches


def _init_firebase(app):
    """Initialize the Firebase Admin SDK from the first credentials source found."""
    cred = None
    project_id = None

    # First, try to load from environment variable (for production)
    cred_json = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if cred_json:
        try:
            cred_info = json.loads(cred_json)
            project_id = cred_info.get("project_id")
            cred = credentials.Certificate(cred_info)
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

    # If env var fails or is not present, try loading from file (for local dev)
    if not cred:
        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path, "r") as f:
                    cred_info = json.load(f)
                project_id = cred_info.get("project_id")
                cred = credentials.Certificate(cred_path)
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

    if not cred:
        try:
            cred = credentials.ApplicationDefault()
            project_id = os.environ.get("FIREBASE_PROJECT_ID")
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )

    if cred and not firebase_admin._apps:
        try:
            options = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, options)
        except ValueError:
            app.logger.info("Firebase app already initialized.")


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        NAVETANE_DEFAULT_QUALIFIED_COUNT=int(
            os.environ.get("NAVETANE_DEFAULT_QUALIFIED_COUNT") or DEFAULT_QUALIFIED_COUNT
        ),
    )

    if test_config:
        app.config.update(test_config)

    # Initialize Firebase Admin SDK only if not in testing mode
    if not app.config.get("TESTING"):
        _init_firebase(app)

    csrf.init_app(app)
    init_caches(app)

    from . import auth

    app.register_blueprint(auth.bp)

    from . import teams

    app.register_blueprint(teams.bp)

    from . import navetane

    app.register_blueprint(navetane.bp)
    app.register_blueprint(navetane.admin_bp)

    from . import stats

    app.register_blueprint(stats.bp)
    app.register_blueprint(stats.admin_bp)

    from . import finals

    app.register_blueprint(finals.bp)

    from . import articles

    app.register_blueprint(articles.bp)
    app.register_blueprint(articles.admin_bp)

    from . import sponsors

    app.register_blueprint(sponsors.bp)
    app.register_blueprint(sponsors.admin_bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    @app.route("/")
    def index():
        return redirect(url_for("navetane.view_navetane"))

    @app.context_processor
    def inject_version():
        """Injects the application version into the template context."""
        return dict(app_version=os.environ.get("APP_VERSION", "dev"))

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
