from flask import Blueprint

from auth.entitlements import get_current_entitlement, get_current_user
from auth.guards import resolve_current_tier
from core.http_utils import _json_ok

api_auth_status_bp = Blueprint("api_auth_status", __name__)


@api_auth_status_bp.route("/api/auth/status", methods=["GET"])
def api_auth_status():
    u = get_current_user()
    if not u:
        return _json_ok({"logged_in": False, "tier": None, "tier_name": None,
                         "is_active_patron": False, "pledge_amount_cents": None})

    ent = get_current_entitlement()
    tier = resolve_current_tier()
    return _json_ok({
        "logged_in": True,
        "name": u.get("name"),
        "email": u.get("email"),
        "tier": tier.id if tier else None,
        "tier_name": tier.name if tier else None,
        "is_active_patron": ent.is_active_patron,
        "pledge_amount_cents": ent.pledge_amount_cents,
    })
