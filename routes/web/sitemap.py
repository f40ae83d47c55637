from flask import Blueprint, Response, current_app

from core.extensions import content_repository
from utils.text import xml_escape
from utils.time_utils import today_iso

sitemap_bp = Blueprint("sitemap", __name__)

STATIC_ROUTES = ("", "/blog", "/projects")


def sitemap_entries(base: str, posts, projects):
    today = today_iso()
    entries = [{"loc": f"{base}{route}", "lastmod": today} for route in STATIC_ROUTES]
    entries += [
        {"loc": f"{base}/blog/{p.slug}", "lastmod": p.metadata.published_at[:10]}
        for p in posts
    ]
    entries += [
        {"loc": f"{base}/projects/{p.slug}", "lastmod": p.metadata.published_at[:10]}
        for p in projects
    ]
    return entries


@sitemap_bp.route("/sitemap.xml")
def sitemap_xml():
    repo = content_repository()
    base = current_app.config["SITE_URL"]

    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.append('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">')
    for u in sitemap_entries(base, repo.get_posts(), repo.get_projects()):
        lines.append("<url>")
        lines.append(f"<loc>{xml_escape(u['loc'])}</loc>")
        lines.append(f"<lastmod>{xml_escape(u['lastmod'])}</lastmod>")
        lines.append("</url>")
    lines.append("</urlset>")

    return Response("\n".join(lines), mimetype="application/xml")
