"""Tests for match endpoints."""
import pytest

from surrogacy_admin.db.enums import ParticipantStatus
from surrogacy_admin.services import match_service


async def _create_match(authed_client, intended_parent, surrogate, **extra):
    payload = {"parent_id": str(intended_parent.id), "surrogate_id": str(surrogate.id)}
    payload.update(extra)
    response = await authed_client.post("/matches", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_match_defaults_to_proposed(authed_client, intended_parent, surrogate):
    data = await _create_match(authed_client, intended_parent, surrogate)

    assert data["status"] == "Proposed"
    assert data["matched_at"] is None
    assert data["parent_name"] == "Morgan Parent"
    assert data["surrogate_name"] == "Jamie Carrier"
    assert data["surrogate_preview"]["location"] == "Austin, TX"
    assert data["parent_accepted"] is False


@pytest.mark.asyncio
async def test_create_match_wrong_role(authed_client, intended_parent, surrogate):
    response = await authed_client.post(
        "/matches",
        json={"parent_id": str(surrogate.id), "surrogate_id": str(intended_parent.id)},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_accepted_stamps_matched_at(authed_client, intended_parent, surrogate):
    match = await _create_match(authed_client, intended_parent, surrogate)

    response = await authed_client.patch(
        f"/matches/{match['id']}/status", json={"status": "Accepted"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Accepted"
    assert response.json()["matched_at"] is not None

    # Any status can follow any other
    response = await authed_client.patch(
        f"/matches/{match['id']}/status", json={"status": "Proposed"}
    )
    assert response.json()["status"] == "Proposed"


@pytest.mark.asyncio
async def test_invalid_status_rejected(authed_client, intended_parent, surrogate):
    match = await _create_match(authed_client, intended_parent, surrogate)
    response = await authed_client.patch(
        f"/matches/{match['id']}/status", json={"status": "Shipped"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_responses_are_independent(authed_client, intended_parent, surrogate):
    match = await _create_match(authed_client, intended_parent, surrogate)

    response = await authed_client.patch(
        f"/matches/{match['id']}/responses",
        json={"parent_accepted": True, "surrogate_declined": True},
    )
    data = response.json()
    assert data["parent_accepted"] is True
    assert data["surrogate_declined"] is True
    assert data["surrogate_accepted"] is False
    assert data["status"] == "Proposed"

    response = await authed_client.patch(
        f"/matches/{match['id']}/responses", json={"parent_declined": True}
    )
    assert response.json()["parent_accepted"] is True
    assert response.json()["parent_declined"] is True


@pytest.mark.asyncio
async def test_stats_and_filters(authed_client, intended_parent, surrogate):
    first = await _create_match(authed_client, intended_parent, surrogate)
    await _create_match(authed_client, intended_parent, surrogate, status="Active")
    await authed_client.patch(f"/matches/{first['id']}", json={"match_score": 87.5})

    response = await authed_client.get("/matches/stats")
    data = response.json()
    assert data["total"] == 2
    assert data["by_status"]["Proposed"] == 1
    assert data["by_status"]["Active"] == 1
    assert data["by_status"]["Completed"] == 0

    response = await authed_client.get("/matches", params={"status": "Active"})
    assert response.json()["total"] == 1

    response = await authed_client.get(f"/matches/{first['id']}")
    assert response.json()["match_score"] == 87.5


@pytest.mark.asyncio
async def test_delete_match(authed_client, intended_parent, surrogate):
    match = await _create_match(authed_client, intended_parent, surrogate)
    response = await authed_client.delete(f"/matches/{match['id']}")
    assert response.status_code == 204
    response = await authed_client.get(f"/matches/{match['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_participant_preview(authed_client, surrogate):
    response = await authed_client.get(f"/matches/participants/{surrogate.id}/preview")
    assert response.status_code == 200
    assert response.json()["readiness_label"] == "Needs screening"


def test_readiness_labels(db, surrogate, intended_parent):
    surrogate.status = ParticipantStatus.PREGNANT.value
    assert match_service.readiness(surrogate) == ("Not eligible: pregnant", "red")

    surrogate.status = ParticipantStatus.NEW_APPLICATION.value
    surrogate.profile_completed = True
    surrogate.form2_completed = True
    assert match_service.readiness(surrogate) == ("Ready", "green")

    intended_parent.profile_completed = False
    assert match_service.readiness(intended_parent)[1] == "yellow"
