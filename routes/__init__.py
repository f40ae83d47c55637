# routes/__init__.py
from .api.auth_status import api_auth_status_bp
from .api.health import api_health_bp
from .web.auth import auth_bp
from .web.blog import blog_bp
from .web.home import home_bp
from .web.patreon_auth import patreon_auth_bp
from .web.projects import projects_bp
from .web.robots import robots_bp
from .web.rss import rss_bp
from .web.sitemap import sitemap_bp


def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(blog_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(patreon_auth_bp)
    app.register_blueprint(sitemap_bp)
    app.register_blueprint(rss_bp)
    app.register_blueprint(robots_bp)
    app.register_blueprint(api_auth_status_bp)
    app.register_blueprint(api_health_bp)
