from services.patreon import (
    active_membership,
    entitlement_from_identity,
    entitlement_from_session_user,
    fetch_identity,
    session_user_from_identity,
    IDENTITY_PARAMS,
)


def _member(cents, status="active_patron", campaign="111"):
    return {
        "type": "member",
        "attributes": {"currently_entitled_amount_cents": cents, "patron_status": status},
        "relationships": {"campaign": {"data": {"id": campaign, "type": "campaign"}}},
    }


def _identity(*members):
    return {
        "data": {"id": "9001", "attributes": {"full_name": "Pat Ron", "email": " Pat@Example.COM "}},
        "included": list(members) + [{"type": "campaign", "id": "111"}],
    }


def test_entitlement_from_active_membership():
    ent = entitlement_from_identity(_identity(_member(2500)))
    assert ent.is_active_patron is True
    assert ent.pledge_amount_cents == 2500


def test_no_membership_means_not_a_patron():
    ent = entitlement_from_identity({"data": {"id": "1"}})
    assert ent.is_active_patron is False
    assert ent.pledge_amount_cents is None


def test_declined_membership_is_ignored():
    ent = entitlement_from_identity(_identity(_member(5000, status="declined_patron")))
    assert ent.is_active_patron is False


def test_highest_active_membership_wins():
    member = active_membership(_identity(_member(1300), _member(5000, campaign="222")))
    assert member["attributes"]["currently_entitled_amount_cents"] == 5000


def test_campaign_filter():
    identity = _identity(_member(1300, campaign="111"), _member(5000, campaign="222"))
    ent = entitlement_from_identity(identity, campaign_id="111")
    assert ent.pledge_amount_cents == 1300


def test_session_user_shape():
    user = session_user_from_identity(_identity(_member(1300)))
    assert user == {
        "patreon_id": "9001",
        "name": "Pat Ron",
        "email": "pat@example.com",
        "pledge_amount_cents": 1300,
        "patron_status": "active_patron",
    }


def test_entitlement_from_session_user():
    assert entitlement_from_session_user(None).is_active_patron is False
    ent = entitlement_from_session_user({"pledge_amount_cents": "2500", "patron_status": "active_patron"})
    assert ent.pledge_amount_cents == 2500
    assert ent.is_active_patron is True
    assert entitlement_from_session_user({"pledge_amount_cents": "abc"}).pledge_amount_cents is None


def test_fetch_identity_requests_memberships():
    seen = {}

    class Resp:
        def raise_for_status(self):
            pass

        def json(self):
            return {"data": {"id": "1"}}

    class Client:
        def get(self, url, token=None, params=None):
            seen.update(url=url, token=token, params=params)
            return Resp()

    assert fetch_identity(Client(), {"access_token": "t"}) == {"data": {"id": "1"}}
    assert seen["url"] == "identity"
    assert seen["params"] == IDENTITY_PARAMS
    assert "memberships.campaign" in seen["params"]["include"].split(",")
