from flask import Blueprint, render_template

from core.extensions import content_repository

home_bp = Blueprint("home", __name__)

LATEST_POSTS = 5


@home_bp.route("/")
def index():
    repo = content_repository()
    return render_template(
        "index.html",
        posts=repo.get_posts()[:LATEST_POSTS],
        projects=repo.featured_projects(),
    )
