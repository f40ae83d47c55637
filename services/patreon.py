# services/patreon.py
"""
Patreon identity -> session user / UserEntitlement.

The identity document is JSON:API:
    data      the user (attributes: email, full_name)
    included  member objects (attributes: currently_entitled_amount_cents, patron_status)
"""
import logging
from typing import Optional

from domain.models import UserEntitlement
from domain.policies import ACTIVE_PATRON_STATUS

log = logging.getLogger(__name__)

IDENTITY_PARAMS = {
    "include": "memberships,memberships.campaign",
    "fields[member]": "currently_entitled_amount_cents,patron_status",
    "fields[user]": "email,full_name",
}


def _member_campaign_id(member: dict) -> Optional[str]:
    rel = (member.get("relationships") or {}).get("campaign") or {}
    data = rel.get("data") or {}
    return data.get("id")


def active_membership(identity: dict, campaign_id: str = None) -> Optional[dict]:
    """The active_patron membership with the highest entitled amount."""
    members = [
        m for m in (identity or {}).get("included") or []
        if m.get("type") == "member"
    ]
    if campaign_id:
        members = [m for m in members if _member_campaign_id(m) == str(campaign_id)]

    active = [
        m for m in members
        if (m.get("attributes") or {}).get("patron_status") == ACTIVE_PATRON_STATUS
    ]
    if not active:
        return None
    return max(active, key=lambda m: int((m.get("attributes") or {}).get("currently_entitled_amount_cents") or 0))


def entitlement_from_identity(identity: dict, campaign_id: str = None) -> UserEntitlement:
    member = active_membership(identity, campaign_id)
    if not member:
        return UserEntitlement(pledge_amount_cents=None, is_active_patron=False)
    attrs = member.get("attributes") or {}
    return UserEntitlement(
        pledge_amount_cents=int(attrs.get("currently_entitled_amount_cents") or 0),
        is_active_patron=True,
    )


def session_user_from_identity(identity: dict, campaign_id: str = None) -> dict:
    data = (identity or {}).get("data") or {}
    attrs = data.get("attributes") or {}
    member = active_membership(identity, campaign_id)
    member_attrs = (member or {}).get("attributes") or {}

    return {
        "patreon_id": data.get("id"),
        "name": attrs.get("full_name") or "",
        "email": (attrs.get("email") or "").strip().lower(),
        "pledge_amount_cents": member_attrs.get("currently_entitled_amount_cents") if member else None,
        "patron_status": member_attrs.get("patron_status") if member else None,
    }


def entitlement_from_session_user(user: Optional[dict]) -> UserEntitlement:
    if not user:
        return UserEntitlement()
    pledge = user.get("pledge_amount_cents")
    try:
        pledge = int(pledge) if pledge is not None else None
    except (TypeError, ValueError):
        pledge = None
    return UserEntitlement(
        pledge_amount_cents=pledge,
        is_active_patron=user.get("patron_status") == ACTIVE_PATRON_STATUS,
    )


def fetch_identity(client, token) -> dict:
    """`client` is the Authlib patreon client; raises on HTTP failure."""
    resp = client.get("identity", token=token, params=IDENTITY_PARAMS)
    resp.raise_for_status()
    return resp.json()
