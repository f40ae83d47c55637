# services/github.py
import base64
import logging
from dataclasses import dataclass

import requests

from utils.retry import _retry

log = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
USER_AGENT = "theautist-blog"


class GitHubAPIError(Exception):
    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class RemoteContentConfigError(Exception):
    pass


@dataclass(frozen=True)
class RemoteRepoConfig:
    owner: str
    repo: str
    token: str
    branch: str = "main"
    path: str = "posts"


def get_remote_repo_config(cfg) -> RemoteRepoConfig:
    """
    CONTENT_REPO_* first, legacy PREMIUM_* names as fallback.
    `cfg` is a mapping (app.config or a plain dict).
    """
    def pick(new, legacy, default=""):
        return (cfg.get(new) or cfg.get(legacy) or default).strip()

    owner = pick("CONTENT_REPO_OWNER", "PREMIUM_REPO_OWNER")
    repo = pick("CONTENT_REPO_NAME", "PREMIUM_REPO_NAME")
    token = pick("CONTENT_REPO_TOKEN", "PREMIUM_REPO_TOKEN")
    branch = pick("CONTENT_REPO_BRANCH", "PREMIUM_REPO_BRANCH", "main")
    path = pick("CONTENT_POSTS_PATH", "PREMIUM_POSTS_PATH", "posts").strip("/")

    if not owner or not repo or not token:
        raise RemoteContentConfigError(
            "Missing required settings: CONTENT_REPO_OWNER, CONTENT_REPO_NAME, "
            "CONTENT_REPO_TOKEN (or legacy PREMIUM_* equivalents)"
        )
    return RemoteRepoConfig(owner=owner, repo=repo, token=token, branch=branch, path=path)


def is_remote_content_configured(cfg) -> bool:
    try:
        get_remote_repo_config(cfg)
        return True
    except RemoteContentConfigError:
        return False


class GitHubClient:
    """Thin wrapper over the GitHub contents API for one repository/branch."""

    def __init__(self, repo_config: RemoteRepoConfig, session=None, timeout=10,
                 tries=2, base_url=GITHUB_API_BASE):
        self.config = repo_config
        self.session = session or requests.Session()
        self.timeout = timeout
        self.tries = tries
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }

    def _get(self, path: str):
        c = self.config
        url = f"{self.base_url}/repos/{c.owner}/{c.repo}/contents/{path.strip('/')}"

        def _do():
            return self.session.get(
                url, headers=self._headers(), params={"ref": c.branch}, timeout=self.timeout
            )

        try:
            r = _retry(_do, tries=self.tries, retry_on=(requests.ConnectionError, requests.Timeout))
        except requests.RequestException as e:
            raise GitHubAPIError(f"request to {path} failed: {e}") from e

        remaining = r.headers.get("X-RateLimit-Remaining")
        limit = r.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            log.debug("GitHub API rate limit: %s/%s", remaining, limit)

        if not r.ok:
            raise GitHubAPIError(
                f"GET {path} failed: {r.status_code} {r.reason} - {r.text[:200]}",
                r.status_code,
            )
        try:
            return r.json()
        except ValueError as e:
            raise GitHubAPIError(f"GET {path} returned invalid JSON", r.status_code) from e

    def list_directory(self, path: str = None) -> list:
        data = self._get(path if path is not None else self.config.path)
        if not isinstance(data, list):
            raise GitHubAPIError("Expected array response from GitHub API")
        return data

    def fetch_file(self, path: str) -> str:
        data = self._get(path)
        if not isinstance(data, dict) or not data.get("content") or data.get("encoding") != "base64":
            raise GitHubAPIError(f"Unexpected file format for {path}")
        try:
            return base64.b64decode(data["content"]).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise GitHubAPIError(f"Could not decode {path}") from e
