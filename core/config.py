import os

from domain.policies import PATREON_TIERS, PREVIEW_CHARS

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _csv(v: str):
    return [x.strip() for x in (v or "").split(",") if x.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    try:
        return int(v) if v not in (None, "") else default
    except ValueError:
        return default


class Config:
    # Flask secret key; signs the session cookie the paywall trusts, no default
    SECRET_KEY = os.getenv("SECRET_KEY", "").strip()

    ENV = os.getenv("FLASK_ENV", "production")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # -------------------------
    # Site
    # -------------------------
    SITE_URL = os.getenv("SITE_URL", "https://theautist.me").rstrip("/")
    SITE_TITLE = os.getenv("SITE_TITLE", "My Portfolio")
    SITE_DESCRIPTION = os.getenv("SITE_DESCRIPTION", "Projects, writing and experiments.")
    AUTHOR_NAME = os.getenv("AUTHOR_NAME", "My Portfolio")
    RSS_TITLE = os.getenv("RSS_TITLE", "My Blog")

    # -------------------------
    # Content
    # -------------------------
    LOCAL_POSTS_DIR = os.getenv("LOCAL_POSTS_DIR", os.path.join(BASE_DIR, "content", "posts"))
    LOCAL_PROJECTS_DIR = os.getenv("LOCAL_PROJECTS_DIR", os.path.join(BASE_DIR, "content", "projects"))

    # drafts hidden in production unless FILTER_DRAFTS says otherwise
    FILTER_DRAFTS = _env_bool("FILTER_DRAFTS", default=(ENV != "development"))

    # remote content repo (legacy PREMIUM_* names still read by services.github)
    CONTENT_REPO_OWNER = os.getenv("CONTENT_REPO_OWNER", "")
    CONTENT_REPO_NAME = os.getenv("CONTENT_REPO_NAME", "")
    CONTENT_REPO_TOKEN = os.getenv("CONTENT_REPO_TOKEN", "")
    CONTENT_REPO_BRANCH = os.getenv("CONTENT_REPO_BRANCH", "")
    CONTENT_POSTS_PATH = os.getenv("CONTENT_POSTS_PATH", "")
    PREMIUM_REPO_OWNER = os.getenv("PREMIUM_REPO_OWNER", "")
    PREMIUM_REPO_NAME = os.getenv("PREMIUM_REPO_NAME", "")
    PREMIUM_REPO_TOKEN = os.getenv("PREMIUM_REPO_TOKEN", "")
    PREMIUM_REPO_BRANCH = os.getenv("PREMIUM_REPO_BRANCH", "")
    PREMIUM_POSTS_PATH = os.getenv("PREMIUM_POSTS_PATH", "")

    GITHUB_API_BASE = os.getenv("GITHUB_API_BASE", "https://api.github.com")
    GITHUB_TIMEOUT = _env_int("GITHUB_TIMEOUT", 10)

    # 1 minute while developing, 1 hour otherwise
    CONTENT_CACHE_TTL = _env_int("CONTENT_CACHE_TTL", 60 if ENV == "development" else 3600)

    # -------------------------
    # Patreon
    # -------------------------
    PATREON_CLIENT_ID = os.getenv("PATREON_CLIENT_ID", "").strip()
    PATREON_CLIENT_SECRET = os.getenv("PATREON_CLIENT_SECRET", "").strip()
    PATREON_CAMPAIGN_ID = os.getenv("PATREON_CAMPAIGN_ID", "").strip()
    PATREON_REDIRECT_URI = os.getenv("PATREON_REDIRECT_URI", "").strip()
    PATREON_AUTHORIZE_URL = "https://www.patreon.com/oauth2/authorize"
    PATREON_TOKEN_URL = "https://www.patreon.com/api/oauth2/token"
    PATREON_API_BASE = "https://www.patreon.com/api/oauth2/v2/"
    PATREON_SCOPE = "identity identity[email] identity.memberships"
    PATREON_PAGE_URL = os.getenv("PATREON_PAGE_URL", "https://www.patreon.com/")

    # =========================
    #  tiers / gating
    # =========================
    PATREON_TIERS = PATREON_TIERS
    PREVIEW_CHARS = _env_int("PREVIEW_CHARS", PREVIEW_CHARS)

    # -------------------------
    # CORS / Origin allowlist
    # -------------------------
    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "https://theautist.me"))

    # -------------------------
    # Rate limiting (Flask-Limiter standard keys)
    # -------------------------
    REDIS_URL = os.getenv("REDIS_URL", "")
    RATELIMIT_STORAGE_URI = REDIS_URL if REDIS_URL else "memory://"
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "300 per hour")
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)


class TestConfig(Config):
    TESTING = True
    ENV = "testing"
    SECRET_KEY = "test-secret"
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    FILTER_DRAFTS = True
    CONTENT_CACHE_TTL = 60
    SITE_URL = "https://example.test"
    PATREON_CLIENT_ID = "test-client"
    PATREON_CLIENT_SECRET = "test-secret"
    PATREON_CAMPAIGN_ID = ""
    CONTENT_REPO_OWNER = ""
    CONTENT_REPO_NAME = ""
    CONTENT_REPO_TOKEN = ""
    PREMIUM_REPO_OWNER = ""
    PREMIUM_REPO_NAME = ""
    PREMIUM_REPO_TOKEN = ""
