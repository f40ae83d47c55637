from flask import Blueprint, render_template, abort, current_app, g

from auth.guards import gate_for, make_preview
from core.extensions import content_repository
from domain.schema import search_query_schema
from routes.web.blog import _absolute
from security.validation import require_safe_args

projects_bp = Blueprint("projects", __name__)


def article_ld(project) -> dict:
    base = current_app.config["SITE_URL"]
    m = project.metadata
    data = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": m.title,
        "datePublished": m.published_at,
        "dateModified": m.published_at,
        "description": m.description or m.summary or "",
        "url": f"{base}/projects/{project.slug}",
        "author": {"@type": "Person", "name": current_app.config["AUTHOR_NAME"]},
    }
    if m.image:
        data["image"] = _absolute(m.image)
    return data


@projects_bp.route("/projects")
@require_safe_args(search_query_schema)
def projects_index():
    query = g.safe_args.get("q", "")
    projects = content_repository().search_projects(query)
    return render_template("projects/index.html", projects=projects, query=query)


@projects_bp.route("/projects/<slug>")
def project_page(slug):
    project = content_repository().get_project(slug)
    if not project:
        abort(404)

    decision = gate_for(project)
    body = project.content if decision.is_full else make_preview(
        project.content, current_app.config["PREVIEW_CHARS"]
    )

    return render_template(
        "projects/project.html",
        project=project,
        body=body,
        decision=decision,
        og_image=_absolute(project.metadata.image),
        structured_data=article_ld(project),
        canonical_url=f"{current_app.config['SITE_URL']}/projects/{project.slug}",
    )
