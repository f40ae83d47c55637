import logging
import secrets
import socket
from datetime import timedelta

from flask import Flask, render_template, request
from werkzeug.middleware.proxy_fix import ProxyFix

import routes
from core.config import Config
from core.context import init_context_processors
from core.extensions import init_extensions
from core.hooks import register_hooks
from core.http_utils import _json_err
from security.headers import init_security_headers
from services.github import is_remote_content_configured


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    app.logger.setLevel(getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO))

    init_secret_key(app)

    init_extensions(app)
    init_security_headers(app)
    init_context_processors(app)
    # GitHub / Patreon calls without an explicit timeout
    socket.setdefaulttimeout(10)

    # cookie defaults
    app.config.update(
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=timedelta(days=30),
    )
    # dev/prod split
    app.config["SESSION_COOKIE_SECURE"] = app.config.get("ENV") not in ("development", "testing")

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    routes.register_routes(app)
    register_hooks(app)
    register_error_handlers(app)

    app.logger.info(
        "[CONTENT] local posts=%s remote configured=%s",
        app.config.get("LOCAL_POSTS_DIR"),
        is_remote_content_configured(app.config),
    )
    return app


def init_secret_key(app):
    secret = app.config.get("SECRET_KEY")
    if not secret:
        if app.config.get("ENV") != "development":
            raise RuntimeError("SECURITY: set the SECRET_KEY environment variable to a strong value.")
        # throwaway key; sessions do not survive a restart
        secret = secrets.token_urlsafe(32)
        app.config["SECRET_KEY"] = secret
        app.logger.warning("SECRET_KEY not set, using a random development key")
    app.secret_key = secret


def register_error_handlers(app):

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith("/api/"):
            return _json_err("not_found", status=404)
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("unhandled error: %s", e)
        return render_template("errors/500.html"), 500
