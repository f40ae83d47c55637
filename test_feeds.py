from routes.web.rss import build_feed
from routes.web.sitemap import STATIC_ROUTES, sitemap_entries
from test_content_sources import _post


def test_sitemap_lists_static_pages_posts_and_projects(client):
    r = client.get("/sitemap.xml")
    assert r.status_code == 200
    assert r.mimetype == "application/xml"
    xml = r.get_data(as_text=True)
    assert "<loc>https://example.test/blog</loc>" in xml
    assert "<loc>https://example.test/blog/nebula-post</loc>" in xml
    assert "<lastmod>2024-06-01</lastmod>" in xml
    assert "<loc>https://example.test/projects/widget</loc>" in xml
    assert "draft-post" not in xml


def test_sitemap_entries_trims_timestamps():
    entries = sitemap_entries("https://x.test", [_post("a", "2024-06-01T10:00:00Z")], [])
    assert len(entries) == len(STATIC_ROUTES) + 1
    assert entries[-1] == {"loc": "https://x.test/blog/a", "lastmod": "2024-06-01"}


def test_rss_feed(client):
    r = client.get("/rss")
    assert r.status_code == 200
    assert r.mimetype == "text/xml"
    xml = r.get_data(as_text=True)
    assert xml.index("Vortex Post") < xml.index("Nebula Post") < xml.index("Free Post")
    assert "<link>https://example.test/blog/free-post</link>" in xml
    assert "Sat, 01 Jun 2024 00:00:00 GMT" in xml
    assert "SECRET" not in xml


def test_rss_escapes_text():
    xml = build_feed("https://x.test", "A & B", "d", [_post("p", "2024-01-01", title="<Tom & Jerry>")])
    assert "<title>A &amp; B</title>" in xml
    assert "&lt;Tom &amp; Jerry&gt;" in xml


def test_robots(client):
    r = client.get("/robots.txt")
    body = r.get_data(as_text=True)
    assert r.mimetype == "text/plain"
    assert "Disallow: /auth/" in body
    assert "Sitemap: https://example.test/sitemap.xml" in body


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}


def test_unknown_api_path_is_json_404(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.get_json()["error"] == "not_found"
