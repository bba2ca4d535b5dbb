"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, middleware, and configuration.
"""
from __future__ import annotations
import hmac
import os
import secrets
from tempfile import gettempdir
from typing import Optional

from flask import Flask, session, request, g, abort
from flask_session import Session
from werkzeug.middleware.proxy_fix import ProxyFix

from directory_admin.config import AppConfig, load_settings

CSRF_SESSION_KEY = "_csrf_token"


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Explicit configuration; loaded from the environment when omitted
    """
    if cfg is None:
        cfg = load_settings()

    app = Flask(__name__)

    # Store config for easy access in routes
    app.config["APP_CONFIG"] = cfg

    # Flask session configuration
    app.config["SECRET_KEY"] = cfg.secret_key or secrets.token_urlsafe(48)
    app.config["SESSION_TYPE"] = os.environ.get("FLASK_SESSION_TYPE", "filesystem")
    if app.config["SESSION_TYPE"] == "filesystem":
        session_dir = os.environ.get("FLASK_SESSION_DIR") or os.path.join(gettempdir(), "directory_admin_session")
        os.makedirs(session_dir, exist_ok=True)
        app.config["SESSION_FILE_DIR"] = session_dir

    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = cfg.session_cookie_secure
    app.config["CSRF_SESSION_KEY"] = CSRF_SESSION_KEY

    Session(app)

    # Trust X-Forwarded-* headers from proxy (nginx)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore

    # Register blueprints
    from directory_admin.api import admin, health, errors

    app.register_blueprint(health.bp)
    app.register_blueprint(admin.bp)

    errors.register_error_handlers(app)

    _register_middleware(app)
    _register_context_processors(app)

    print(f"[flask_app] Directory API: {cfg.base_url}")
    if not cfg.is_configured:
        print("[flask_app] WARNING: directory API not configured; the user table stays empty")

    return app


def _register_middleware(app: Flask):
    """Register before_request middleware."""

    @app.before_request
    def issue_csrf_token() -> None:
        g.csrf_token = _generate_csrf_token()

    @app.before_request
    def enforce_csrf() -> None:
        """Validate CSRF token for state-changing requests."""
        if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
            return

        submitted_token = request.form.get("csrf_token") or request.headers.get("X-CSRF-Token", "")
        session_token = session.get(app.config["CSRF_SESSION_KEY"], "")

        if not session_token or not submitted_token or not hmac.compare_digest(session_token, submitted_token):
            abort(400, description="CSRF validation failed")


def _register_context_processors(app: Flask):
    """Register context processors for templates."""

    @app.context_processor
    def inject_global_context():
        """Inject global variables into all templates."""
        return {"csrf_token": g.get("csrf_token") or _generate_csrf_token()}


# ─────────────────────────────────────────────────────────────────────────────
# Helper Functions
# ─────────────────────────────────────────────────────────────────────────────
def _generate_csrf_token() -> str:
    """Generate or retrieve CSRF token for current session."""
    token = session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        session[CSRF_SESSION_KEY] = token
    return token
