import markdown as md
from flask import current_app
from markupsafe import Markup

from auth.entitlements import get_current_user
from auth.guards import current_registry, resolve_current_tier
from domain.tiers import format_tier_amount
from utils.time_utils import format_date

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


def render_markdown(text: str) -> Markup:
    # content is authored by the site owner (local files / own content repo)
    return Markup(md.markdown(text or "", extensions=MARKDOWN_EXTENSIONS))


def init_context_processors(app):
    app.add_template_filter(render_markdown, "markdown")
    app.add_template_filter(format_date, "format_date")
    app.add_template_filter(format_tier_amount, "tier_amount")

    @app.context_processor
    def inject_site():
        cfg = current_app.config
        return {
            "SITE_URL": cfg.get("SITE_URL"),
            "SITE_TITLE": cfg.get("SITE_TITLE"),
            "SITE_DESCRIPTION": cfg.get("SITE_DESCRIPTION"),
            "AUTHOR_NAME": cfg.get("AUTHOR_NAME"),
            "PATREON_PAGE_URL": cfg.get("PATREON_PAGE_URL"),
        }

    @app.context_processor
    def inject_user():
        return {
            "current_user": get_current_user(),
            "current_tier": resolve_current_tier(),
            "tier_registry": current_registry(),
        }
