from authlib.integrations.base_client.errors import OAuthError
from flask import Blueprint, redirect, request, session, current_app, url_for
from requests import RequestException

from core.extensions import oauth
from services.patreon import fetch_identity, session_user_from_identity
from utils.text import is_safe_next_url

patreon_auth_bp = Blueprint("patreon_auth", __name__, url_prefix="/auth")


def _patreon_client():
    return oauth.create_client("patreon")


def _error_redirect(code: str):
    return redirect(url_for("auth.error", error=code))


def _redirect_uri() -> str:
    # behind ProxyFix url_for(_external=True) already has the public scheme/host
    return current_app.config.get("PATREON_REDIRECT_URI") or url_for(
        "patreon_auth.callback_patreon", _external=True
    )


@patreon_auth_bp.get("/login/patreon")
def login_patreon():
    cfg = current_app.config
    if not cfg.get("PATREON_CLIENT_ID") or not cfg.get("PATREON_CLIENT_SECRET"):
        current_app.logger.error("Patreon OAuth is not configured")
        return _error_redirect("Configuration")

    next_url = request.args.get("next") or "/"
    session["post_login_redirect"] = next_url if is_safe_next_url(next_url) else "/"

    return _patreon_client().authorize_redirect(_redirect_uri())


@patreon_auth_bp.get("/callback/patreon")
def callback_patreon():
    # user pressed "deny" on Patreon
    if request.args.get("error"):
        current_app.logger.info("Patreon authorization denied: %s", request.args.get("error"))
        return _error_redirect("AccessDenied")

    client = _patreon_client()
    try:
        token = client.authorize_access_token()
    except OAuthError as e:
        current_app.logger.warning("Patreon token exchange failed: %s", e)
        return _error_redirect("Verification")

    campaign_id = current_app.config.get("PATREON_CAMPAIGN_ID") or None
    try:
        identity = fetch_identity(client, token)
    except (RequestException, ValueError) as e:
        current_app.logger.error("Failed to fetch Patreon identity: %s", e)
        return _error_redirect("OAuthCallback")

    user = session_user_from_identity(identity, campaign_id)
    if not user.get("patreon_id"):
        current_app.logger.warning("Patreon identity response without user id")
        return _error_redirect("OAuthCallback")

    next_url = session.pop("post_login_redirect", None) or "/"

    session.clear()
    session["user"] = user
    session.permanent = True

    current_app.logger.info(
        "[AUTH] patreon login id=%s status=%s pledge=%s",
        user["patreon_id"], user["patron_status"], user["pledge_amount_cents"],
    )
    return redirect(next_url)
