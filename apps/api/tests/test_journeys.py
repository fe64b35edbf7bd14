"""Tests for journey endpoints: stage track, cancel, milestones, documents."""
import pytest

from surrogacy_admin.db.models import Match


async def _start_journey(authed_client, intended_parent, surrogate, **extra):
    payload = {"parent_id": str(intended_parent.id), "surrogate_id": str(surrogate.id)}
    payload.update(extra)
    response = await authed_client.post("/journeys", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_journey_defaults(authed_client, intended_parent, surrogate):
    data = await _start_journey(authed_client, intended_parent, surrogate)

    assert data["status"] == "Medical Screening"
    assert data["case_number"] == "J-00001"
    assert data["next_stage"] == "Legal"
    assert data["medical_records"] == []

    second = await _start_journey(authed_client, intended_parent, surrogate)
    assert second["case_number"] == "J-00002"


@pytest.mark.asyncio
async def test_create_journey_from_match(authed_client, db, intended_parent, surrogate):
    match = Match(parent_id=intended_parent.id, surrogate_id=surrogate.id)
    db.add(match)
    db.commit()

    response = await authed_client.post("/journeys", json={"match_id": str(match.id)})
    assert response.status_code == 201
    data = response.json()
    assert data["match_id"] == str(match.id)
    assert data["parent_id"] == str(intended_parent.id)
    assert data["surrogate_id"] == str(surrogate.id)


@pytest.mark.asyncio
async def test_create_journey_role_mismatch(authed_client, intended_parent, surrogate):
    response = await authed_client.post(
        "/journeys",
        json={"parent_id": str(surrogate.id), "surrogate_id": str(intended_parent.id)},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_case_number(authed_client, intended_parent, surrogate):
    await _start_journey(authed_client, intended_parent, surrogate, case_number="GC-7")
    response = await authed_client.post(
        "/journeys", json={"parent_id": str(intended_parent.id), "case_number": "GC-7"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_progress_to_completed(authed_client, intended_parent, surrogate):
    journey = await _start_journey(authed_client, intended_parent, surrogate)

    response = await authed_client.post(
        f"/journeys/{journey['id']}/transition", json={"target_status": "Birth"}
    )
    assert response.status_code == 200
    assert response.json()["completed_at"] is None

    response = await authed_client.post(
        f"/journeys/{journey['id']}/progress", json={"notes": "healthy"}
    )
    data = response.json()
    assert data["status"] == "Completed"
    assert data["completed_at"] is not None
    assert data["next_stage"] is None
    assert [h["stage"] for h in data["history"]] == ["Medical Screening", "Birth"]

    response = await authed_client.post(f"/journeys/{journey['id']}/progress", json={})
    assert response.status_code == 400

    response = await authed_client.post(f"/journeys/{journey['id']}/cancel", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cancel_is_terminal(authed_client, intended_parent, surrogate):
    journey = await _start_journey(authed_client, intended_parent, surrogate)
    await authed_client.post(f"/journeys/{journey['id']}/progress", json={})

    response = await authed_client.post(
        f"/journeys/{journey['id']}/cancel", json={"notes": "withdrew"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Cancelled"
    assert data["cancelled_at"] is not None
    assert data["progress_percent"] is None
    assert data["history"][-1]["stage"] == "Legal"
    assert data["history"][-1]["notes"] == "withdrew"

    response = await authed_client.get(f"/journeys/{journey['id']}/next-stage")
    assert response.json()["next_stage"] is None

    response = await authed_client.get(f"/journeys/{journey['id']}/timeline")
    stages = response.json()["stages"]
    assert "current" not in {s["status"] for s in stages}
    assert stages[0]["status"] == "completed"
    assert stages[1]["stage"] == "Legal"
    assert stages[1]["status"] == "cancelled"
    assert stages[1]["completed_at"] is not None
    assert all(s["status"] == "upcoming" for s in stages[2:])

    response = await authed_client.post(f"/journeys/{journey['id']}/progress", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_counts(authed_client, intended_parent, surrogate):
    first = await _start_journey(authed_client, intended_parent, surrogate)
    await _start_journey(authed_client, intended_parent, surrogate)
    await authed_client.post(f"/journeys/{first['id']}/cancel", json={})

    response = await authed_client.get("/journeys/status-counts")
    data = response.json()
    assert data["counts"]["Medical Screening"] == 1
    assert data["counts"]["Cancelled"] == 1
    assert data["total"] == 2


@pytest.mark.asyncio
async def test_update_journey_details(authed_client, intended_parent, surrogate):
    journey = await _start_journey(authed_client, intended_parent, surrogate)
    response = await authed_client.patch(
        f"/journeys/{journey['id']}",
        json={"estimated_delivery_date": "2027-03-01", "journey_notes": [{"text": "hi"}]},
    )
    assert response.status_code == 200
    assert response.json()["estimated_delivery_date"] == "2027-03-01"
    assert response.json()["journey_notes"] == [{"text": "hi"}]
    assert response.json()["status"] == "Medical Screening"


@pytest.mark.asyncio
async def test_milestone_upsert(authed_client, intended_parent, surrogate):
    journey = await _start_journey(authed_client, intended_parent, surrogate)
    url = f"/journeys/{journey['id']}/milestones"

    response = await authed_client.put(
        url, json={"title": "Embryo transfer", "scheduled_date": "2026-12-01"}
    )
    assert response.status_code == 200
    milestone = response.json()
    assert milestone["status"] == "pending"

    response = await authed_client.put(
        url,
        json={"id": milestone["id"], "title": "Embryo transfer", "status": "completed"},
    )
    assert response.json()["id"] == milestone["id"]
    assert response.json()["status"] == "completed"

    response = await authed_client.get(url)
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_milestone_from_other_journey_404(authed_client, intended_parent, surrogate):
    first = await _start_journey(authed_client, intended_parent, surrogate)
    second = await _start_journey(authed_client, intended_parent, surrogate)
    created = await authed_client.put(
        f"/journeys/{first['id']}/milestones", json={"title": "Legal review"}
    )

    response = await authed_client.put(
        f"/journeys/{second['id']}/milestones",
        json={"id": created.json()["id"], "title": "Legal review"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_documents(authed_client, intended_parent, surrogate):
    journey = await _start_journey(authed_client, intended_parent, surrogate)
    response = await authed_client.post(
        f"/journeys/{journey['id']}/documents",
        json={"name": "Agreement.pdf", "url": "https://files.test/a.pdf"},
    )
    assert response.status_code == 201
    assert response.json()["status"] == "pending"

    response = await authed_client.get(f"/journeys/{journey['id']}/documents")
    assert [d["name"] for d in response.json()] == ["Agreement.pdf"]
