import textwrap

import pytest

from app import create_app
from core.config import TestConfig
from domain.policies import PATREON_TIERS
from domain.tiers import build_registry

POSTS = {
    "free-post.md": """
        ---
        title: Free Post
        publishedAt: 2024-05-01
        summary: Open to everyone
        ---

        Everyone can read this body.
    """,
    "nebula-post.md": """
        ---
        title: Nebula Post
        publishedAt: 2024-06-01
        summary: For nebula supporters
        tier: nebula-nomad
        ---

        Opening paragraph that anyone may preview.

        SECRET-NEBULA paragraph reserved for supporters.
    """,
    "vortex-post.md": """
        ---
        title: Vortex Post
        publishedAt: 2024-07-01
        summary: For vortex supporters
        tier: vortex-vanguard
        ---

        Vortex teaser.

        SECRET-VORTEX deep dive.
    """,
    "draft-post.md": """
        ---
        title: Draft Post
        publishedAt: 2024-08-01
        summary: Not ready
        draft: true
        ---

        Draft body.
    """,
    "patreon-post.md": """
        ---
        title: Patreon Post
        publishedAt: 2024-04-01
        summary: Marked paid without a tier
        paid: true
        ---

        Paid-flag body shown to everyone.
    """,
    "cased-tier.md": """
        ---
        title: Cased Tier
        publishedAt: 2024-03-01
        summary: Tier id with capitals
        tier: Nebula-Nomad
        ---

        Cased teaser.

        SECRET-CASED remainder.
    """,
    "broken.md": """
        ---
        title: Broken
        ---

        Missing summary and date.
    """,
}

PROJECTS = {
    "widget.md": """
        ---
        title: Widget
        publishedAt: 2024-03-01
        description: A small widget
        tags: [python, flask]
        status: active
        featured: true
        ---

        Widget write-up.
    """,
    "secret-lab.md": """
        ---
        title: Secret Lab
        publishedAt: 2024-04-01
        description: Supporter-only lab notes
        tier: eclipse-enigma
        ---

        Lab intro.

        SECRET-LAB results.
    """,
}


def _write(directory, files):
    directory.mkdir(parents=True, exist_ok=True)
    for name, body in files.items():
        (directory / name).write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")


@pytest.fixture
def registry():
    return build_registry(PATREON_TIERS)


@pytest.fixture
def content_dir(tmp_path):
    _write(tmp_path / "posts", POSTS)
    _write(tmp_path / "projects", PROJECTS)
    return tmp_path


@pytest.fixture
def app(content_dir):
    class _Config(TestConfig):
        LOCAL_POSTS_DIR = str(content_dir / "posts")
        LOCAL_PROJECTS_DIR = str(content_dir / "projects")

    return create_app(_Config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(pledge_amount_cents=None, patron_status="active_patron", patreon_id="42"):
        with client.session_transaction() as s:
            s["user"] = {
                "patreon_id": patreon_id,
                "name": "Pat Ron",
                "email": "pat@example.com",
                "pledge_amount_cents": pledge_amount_cents,
                "patron_status": patron_status,
            }
    return _login
