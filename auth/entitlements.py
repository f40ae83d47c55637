from typing import Optional

from flask import g, session

from domain.models import ANONYMOUS, UserEntitlement
from services.patreon import entitlement_from_session_user

# Session layout (set by routes/web/patreon_auth.py):
#   session["user"] = {patreon_id, name, email, pledge_amount_cents, patron_status}
# Nothing is stored server side; the entitlement is rebuilt from this per request.


# before_request hook: call once, then read through the getters below
def load_current_user():
    user = session.get("user") or None
    if user and not user.get("patreon_id"):
        # stale/foreign session shape
        session.pop("user", None)
        user = None

    g.current_user = user
    g.entitlement = entitlement_from_session_user(user)
    return user


def get_current_user() -> Optional[dict]:
    return getattr(g, "current_user", None)


def get_current_entitlement() -> UserEntitlement:
    return getattr(g, "entitlement", None) or ANONYMOUS


def is_authenticated() -> bool:
    return get_current_user() is not None
