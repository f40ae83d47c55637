from flask import Blueprint, render_template, abort, current_app, g

from auth.guards import gate_for, make_preview
from core.extensions import content_repository
from domain.schema import search_query_schema
from security.validation import require_safe_args

blog_bp = Blueprint("blog", __name__)


def _absolute(path_or_url: str) -> str:
    if not path_or_url:
        return ""
    if path_or_url.startswith(("http://", "https://")):
        return path_or_url
    return f"{current_app.config['SITE_URL']}{path_or_url}"


def blog_posting_ld(post) -> dict:
    base = current_app.config["SITE_URL"]
    m = post.metadata
    data = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": m.title,
        "datePublished": m.published_at,
        "dateModified": m.published_at,
        "description": m.summary,
        "url": f"{base}/blog/{post.slug}",
        "author": {"@type": "Person", "name": current_app.config["AUTHOR_NAME"]},
    }
    if m.image:
        data["image"] = _absolute(m.image)
    if post.required_tier:
        # paywalled-content markup so crawlers don't treat the preview as cloaking
        data["isAccessibleForFree"] = False
    return data


@blog_bp.route("/blog")
@require_safe_args(search_query_schema)
def blog_index():
    query = g.safe_args.get("q", "")
    posts = content_repository().search_posts(query)
    return render_template("blog/index.html", posts=posts, query=query)


@blog_bp.route("/blog/<slug>")
def blog_post(slug):
    post = content_repository().get_post(slug)
    if not post:
        abort(404)

    decision = gate_for(post)
    if decision.is_full:
        body = post.content
    else:
        # only the preview leaves the server
        body = make_preview(post.content, current_app.config["PREVIEW_CHARS"])

    return render_template(
        "blog/post.html",
        post=post,
        body=body,
        decision=decision,
        og_image=_absolute(post.metadata.image),
        structured_data=blog_posting_ld(post),
        canonical_url=f"{current_app.config['SITE_URL']}/blog/{post.slug}",
    )
