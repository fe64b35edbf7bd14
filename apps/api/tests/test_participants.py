"""Tests for /surrogates and /parents plus display name resolution."""
import pytest

from surrogacy_admin.db.enums import UserRole
from surrogacy_admin.db.models import Match, MedicalScreening, User
from surrogacy_admin.utils.display_names import resolve_display_name


@pytest.mark.asyncio
async def test_create_surrogate_defaults(authed_client):
    response = await authed_client.post(
        "/surrogates",
        json={"email": "  Riley@Example.COM ", "first_name": " Riley  ", "last_name": "Stone"},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["role"] == "Surrogate"
    assert data["status"] == "New Application"
    assert data["email"] == "riley@example.com"
    assert data["first_name"] == "Riley"
    assert data["display_name"] == "Riley Stone"


@pytest.mark.asyncio
async def test_create_parent_defaults_to_new_inquiry(authed_client):
    response = await authed_client.post("/parents", json={"parent1": {"name": "Ana Ruiz"}})
    assert response.status_code == 201
    assert response.json()["status"] == "New Inquiry"
    assert response.json()["display_name"] == "Ana Ruiz"


@pytest.mark.asyncio
async def test_duplicate_email(authed_client):
    await authed_client.post("/parents", json={"email": "dup@example.com"})
    response = await authed_client.post("/surrogates", json={"email": "DUP@example.com"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_must_fit_role(authed_client, surrogate, intended_parent):
    response = await authed_client.patch(
        f"/surrogates/{surrogate.id}/status", json={"status": "New Inquiry"}
    )
    assert response.status_code == 400

    response = await authed_client.patch(
        f"/surrogates/{surrogate.id}/status",
        json={"status": "Pre-Screen", "admin_notes": "called"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Pre-Screen"
    assert response.json()["admin_notes"] == "called"

    # Legacy values remain valid
    response = await authed_client.patch(
        f"/parents/{intended_parent.id}/status", json={"status": "Matched"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_role_scoped_lookup(authed_client, surrogate):
    response = await authed_client.get(f"/parents/{surrogate.id}")
    assert response.status_code == 404
    response = await authed_client.get(f"/surrogates/{surrogate.id}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_list_search_and_filter(authed_client, user_factory):
    user_factory(UserRole.SURROGATE, first_name="Tess", last_name="North", status="Pre-Screen")
    user_factory(UserRole.SURROGATE, first_name="Una", last_name="South", status="On Hold")
    user_factory(UserRole.SURROGATE, first_name="100%", last_name="Literal")

    response = await authed_client.get("/surrogates", params={"q": "nort"})
    assert [u["display_name"] for u in response.json()["items"]] == ["Tess North"]

    response = await authed_client.get("/surrogates", params={"status": "On Hold"})
    assert response.json()["total"] == 1

    response = await authed_client.get("/surrogates", params={"q": "%"})
    assert response.json()["total"] == 1

    response = await authed_client.get("/surrogates", params={"per_page": 2})
    assert response.json()["total"] == 3
    assert len(response.json()["items"]) == 2
    assert response.json()["pages"] == 2


@pytest.mark.asyncio
async def test_update_replaces_blobs(authed_client, surrogate):
    response = await authed_client.patch(
        f"/surrogates/{surrogate.id}",
        json={"form_data": {"firstName": "Jo"}, "profile_completed": True},
    )
    data = response.json()
    assert data["form_data"] == {"firstName": "Jo"}
    assert data["profile_completed"] is True
    assert data["display_name"] == "Jo"

    response = await authed_client.patch(
        f"/surrogates/{surrogate.id}", json={"profile_completed": None}
    )
    assert response.json()["profile_completed"] is True


@pytest.mark.asyncio
async def test_display_name_consistent_across_endpoints(
    authed_client, surrogate, intended_parent
):
    expected = "Jamie Carrier"

    listed = (await authed_client.get("/surrogates")).json()["items"][0]
    detail = (await authed_client.get(f"/surrogates/{surrogate.id}")).json()
    match = (
        await authed_client.post(
            "/matches",
            json={"parent_id": str(intended_parent.id), "surrogate_id": str(surrogate.id)},
        )
    ).json()
    case = (
        await authed_client.post(
            "/cases",
            json={"surrogate_id": str(surrogate.id), "parent_id": str(intended_parent.id)},
        )
    ).json()
    payment = (
        await authed_client.post(
            "/payments",
            json={"surrogate_id": str(surrogate.id), "type": "Allowance", "amount": "10.00"},
        )
    ).json()

    assert listed["display_name"] == expected
    assert detail["display_name"] == expected
    assert match["surrogate_name"] == expected
    assert case["surrogate_name"] == expected
    assert payment["surrogate_name"] == expected


@pytest.mark.asyncio
async def test_delete_requires_admin(authed_client, admin_client, db, surrogate, intended_parent):
    match = Match(parent_id=intended_parent.id, surrogate_id=surrogate.id)
    db.add(match)
    db.add(MedicalScreening(surrogate_id=surrogate.id))
    db.commit()
    match_id = match.id

    response = await authed_client.delete(f"/surrogates/{surrogate.id}")
    assert response.status_code == 403

    response = await admin_client.delete(f"/surrogates/{surrogate.id}")
    assert response.status_code == 204

    db.expire_all()
    assert db.get(User, surrogate.id) is None
    assert db.get(Match, match_id).surrogate_id is None
    assert db.query(MedicalScreening).count() == 0


@pytest.mark.asyncio
async def test_delete_parent_removes_matches(admin_client, db, surrogate, intended_parent):
    db.add(Match(parent_id=intended_parent.id, surrogate_id=surrogate.id))
    db.commit()

    response = await admin_client.delete(f"/parents/{intended_parent.id}")
    assert response.status_code == 204
    db.expire_all()
    assert db.query(Match).count() == 0


def test_resolve_display_name_precedence():
    assert resolve_display_name(
        User(parent1={"name": "P One"}, form_data={"firstName": "F"}, first_name="X")
    ) == "F"
    assert resolve_display_name(
        User(parent1={"name": "P One"}, form_data={"city": "Reno"}, first_name="X")
    ) == "P One"
    assert resolve_display_name(
        User(form_data={"firstName": "Fi", "lastName": "La"}, first_name="X")
    ) == "Fi La"
    assert resolve_display_name(User(first_name="Col", last_name="Umn")) == "Col Umn"
    assert resolve_display_name(User(email="e@x.com")) == "e@x.com"
    assert resolve_display_name(User()) == "Unknown user"
    assert resolve_display_name(None) == "Unknown user"


@pytest.mark.asyncio
async def test_form_data_name_wins_over_legacy_parent_name(authed_client, db, surrogate):
    response = await authed_client.post(
        "/parents",
        json={
            "form_data": {"firstName": "Jane", "lastName": "Doe"},
            "parent1": {"name": "Janet Legacy"},
        },
    )
    assert response.status_code == 201
    parent = response.json()
    assert parent["display_name"] == "Jane Doe"

    response = await authed_client.get(f"/parents/{parent['id']}")
    assert response.json()["display_name"] == "Jane Doe"

    response = await authed_client.get("/parents")
    assert [p["display_name"] for p in response.json()["items"]] == ["Jane Doe"]

    response = await authed_client.post(
        "/matches", json={"parent_id": parent["id"], "surrogate_id": str(surrogate.id)}
    )
    assert response.status_code == 201
    assert response.json()["parent_name"] == "Jane Doe"


@pytest.mark.asyncio
async def test_search_matches_intake_names(authed_client, user_factory):
    user_factory(UserRole.SURROGATE, form_data={"firstName": "Harper", "lastName": "Vale"})
    user_factory(UserRole.INTENDED_PARENT, parent1={"name": "Quinn Morrow"})
    user_factory(UserRole.SURROGATE, first_name="Other", last_name="Person")

    response = await authed_client.get("/surrogates", params={"q": "harp"})
    assert [u["display_name"] for u in response.json()["items"]] == ["Harper Vale"]

    response = await authed_client.get("/surrogates", params={"q": "vale"})
    assert response.json()["total"] == 1

    response = await authed_client.get("/parents", params={"q": "morrow"})
    assert [u["display_name"] for u in response.json()["items"]] == ["Quinn Morrow"]
