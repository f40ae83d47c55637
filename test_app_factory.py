import logging

import pytest
from flask import Flask
from flask.sessions import SecureCookieSessionInterface

from app import create_app
from core.config import Config, TestConfig
from services.content import FallbackContentSource, GitHubContentSource


def _signed_session(secret_key, data):
    signer = Flask("forger")
    signer.secret_key = secret_key
    return SecureCookieSessionInterface().get_signing_serializer(signer).dumps(data)


def test_missing_secret_key_refuses_to_start(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.setattr(Config, "SECRET_KEY", "")
    monkeypatch.setattr(Config, "ENV", "production")
    with pytest.raises(RuntimeError):
        create_app(Config)


def test_development_without_secret_key_gets_random_key(content_dir):
    class _Dev(TestConfig):
        ENV = "development"
        SECRET_KEY = ""
        LOCAL_POSTS_DIR = str(content_dir / "posts")
        LOCAL_PROJECTS_DIR = str(content_dir / "projects")

    first, second = create_app(_Dev), create_app(_Dev)
    assert first.secret_key
    assert first.secret_key != second.secret_key


def test_session_signed_with_another_key_is_ignored(client):
    forged = _signed_session("local-dev-secret", {"user": {
        "patreon_id": "x", "pledge_amount_cents": 5000, "patron_status": "active_patron",
    }})
    client.set_cookie("session", forged)
    html = client.get("/blog/vortex-post").get_data(as_text=True)
    assert "SECRET-VORTEX" not in html
    assert client.get("/api/auth/status").get_json()["logged_in"] is False


def test_startup_log_needs_complete_repo_settings(caplog, content_dir):
    class _OwnerOnly(TestConfig):
        CONTENT_REPO_OWNER = "me"
        LOCAL_POSTS_DIR = str(content_dir / "posts")
        LOCAL_PROJECTS_DIR = str(content_dir / "projects")

    with caplog.at_level(logging.INFO):
        create_app(_OwnerOnly)
    assert "remote configured=False" in caplog.text


def test_default_content_wiring(app):
    source = app.extensions["content"].source
    assert isinstance(source, FallbackContentSource)
    assert isinstance(source.primary, GitHubContentSource)
    assert source.primary.cache.ttl == app.config["CONTENT_CACHE_TTL"]
    assert "content_cache" not in app.extensions
