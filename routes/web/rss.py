from flask import Blueprint, Response, current_app

from core.extensions import content_repository
from utils.text import xml_escape
from utils.time_utils import rfc822

rss_bp = Blueprint("rss", __name__)


def build_feed(base: str, title: str, description: str, posts) -> str:
    items = []
    for post in posts:
        m = post.metadata
        link = f"{base}/blog/{post.slug}"
        items.append(
            "<item>"
            f"<title>{xml_escape(m.title)}</title>"
            f"<link>{xml_escape(link)}</link>"
            f"<guid>{xml_escape(link)}</guid>"
            f"<description>{xml_escape(m.summary or '')}</description>"
            f"<pubDate>{rfc822(m.published_at)}</pubDate>"
            "</item>"
        )

    return (
        '<?xml version="1.0" encoding="UTF-8" ?>\n'
        '<rss version="2.0">\n'
        "<channel>\n"
        f"<title>{xml_escape(title)}</title>\n"
        f"<link>{xml_escape(base)}</link>\n"
        f"<description>{xml_escape(description)}</description>\n"
        + "\n".join(items)
        + "\n</channel>\n</rss>"
    )


@rss_bp.route("/rss")
def rss_feed():
    cfg = current_app.config
    # repository already returns newest first
    body = build_feed(cfg["SITE_URL"], cfg["RSS_TITLE"], cfg["SITE_DESCRIPTION"],
                      content_repository().get_posts())
    return Response(body, mimetype="text/xml")
