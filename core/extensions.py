# extensions.py
from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

from authlib.integrations.flask_client import OAuth

from domain.tiers import build_registry
from services.content import (
    ContentRepository,
    FallbackContentSource,
    GitHubContentSource,
    LocalContentSource,
)
from services.github import GitHubClient, get_remote_repo_config
from utils.cache import TTLCache


csrf = CSRFProtect()

# limiter reads storage/default limits from app.config
limiter = Limiter(key_func=get_remote_address)

cors = CORS()
oauth = OAuth()


def init_extensions(app):
    csrf.init_app(app)

    app.config.setdefault("RATELIMIT_DEFAULT", "300 per hour")
    limiter.init_app(app)

    # CORS: /api/* only
    cors.init_app(
        app,
        supports_credentials=True,
        resources={
            r"/api/*": {
                "origins": app.config.get("CORS_ORIGINS") or [],
                "methods": ["GET"],
                "allow_headers": ["Content-Type"],
            }
        },
    )

    init_oauth(app)
    init_tier_registry(app)
    init_content(app)


def init_oauth(app):
    oauth.init_app(app)
    cfg = app.config
    oauth.register(
        name="patreon",
        client_id=cfg.get("PATREON_CLIENT_ID"),
        client_secret=cfg.get("PATREON_CLIENT_SECRET"),
        authorize_url=cfg.get("PATREON_AUTHORIZE_URL"),
        access_token_url=cfg.get("PATREON_TOKEN_URL"),
        api_base_url=cfg.get("PATREON_API_BASE"),
        client_kwargs={"scope": cfg.get("PATREON_SCOPE")},
    )


def init_tier_registry(app):
    # built once; a bad tier table fails at startup, not per request
    app.extensions["tier_registry"] = build_registry(app.config["PATREON_TIERS"])


def init_content(app, source=None):
    """
    Wire the content repository. Tests pass their own `source`.
    """
    cfg = app.config
    if source is None:
        cache = TTLCache(ttl_seconds=cfg.get("CONTENT_CACHE_TTL", 3600))

        def _client():
            return GitHubClient(
                get_remote_repo_config(cfg),
                timeout=cfg.get("GITHUB_TIMEOUT", 10),
                base_url=cfg.get("GITHUB_API_BASE", "https://api.github.com"),
            )

        source = FallbackContentSource(
            primary=GitHubContentSource(_client, cache),
            fallback=LocalContentSource(cfg["LOCAL_POSTS_DIR"], cfg["LOCAL_PROJECTS_DIR"]),
        )

    app.extensions["content"] = ContentRepository(source, filter_drafts=cfg.get("FILTER_DRAFTS", True))


def content_repository() -> ContentRepository:
    return current_app.extensions["content"]
