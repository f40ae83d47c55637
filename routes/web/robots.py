from flask import Blueprint, Response, current_app

robots_bp = Blueprint("robots", __name__)


@robots_bp.route("/robots.txt")
def robots_txt():
    base = current_app.config["SITE_URL"]
    content = f"""User-agent: *
Allow: /
Disallow: /auth/
Disallow: /api/

Sitemap: {base}/sitemap.xml
"""
    return Response(content, mimetype="text/plain")
