"""Tests for surrogacy case endpoints and stage progression."""
import pytest
from sqlalchemy import update

from surrogacy_admin.db.models import CaseStageHistory, SurrogacyCase
from surrogacy_admin.services import milestone_service
from surrogacy_admin.services.stage_progression import StageConflictError


async def _create_case(authed_client, surrogate, intended_parent):
    response = await authed_client.post(
        "/cases",
        json={"surrogate_id": str(surrogate.id), "parent_id": str(intended_parent.id)},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_case_starts_at_matching(authed_client, surrogate, intended_parent):
    data = await _create_case(authed_client, surrogate, intended_parent)

    assert data["current_stage"] == "Matching"
    assert data["next_stage"] == "Screening"
    assert data["surrogate_name"] == "Jamie Carrier"
    assert data["parent_name"] == "Morgan Parent"
    assert data["history"] == []


@pytest.mark.asyncio
async def test_create_case_with_names_only(authed_client):
    response = await authed_client.post(
        "/cases", json={"surrogate_name": "Pat Lee", "parent_name": "Sam Roe"}
    )
    assert response.status_code == 201
    assert response.json()["surrogate_name"] == "Pat Lee"


@pytest.mark.asyncio
async def test_create_case_requires_participants(authed_client):
    response = await authed_client.post("/cases", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_progress_appends_history(
    authed_client, db, surrogate, intended_parent, staff_user
):
    case = await _create_case(authed_client, surrogate, intended_parent)

    response = await authed_client.post(
        f"/cases/{case['id']}/progress", json={"notes": "done"}
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["current_stage"] == "Screening"
    assert len(data["history"]) == 1
    entry = data["history"][0]
    assert entry["stage"] == "Matching"
    assert entry["notes"] == "done"
    assert entry["completed_by_user_id"] == str(staff_user.id)

    rows = db.query(CaseStageHistory).all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_progress_at_final_stage_fails(authed_client, surrogate, intended_parent):
    case = await _create_case(authed_client, surrogate, intended_parent)
    response = await authed_client.post(
        f"/cases/{case['id']}/transition", json={"target_stage": "Completed"}
    )
    assert response.status_code == 200
    assert response.json()["next_stage"] is None
    assert response.json()["progress_percent"] == 100

    response = await authed_client.post(f"/cases/{case['id']}/progress", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_transition_backwards_rejected(authed_client, surrogate, intended_parent):
    case = await _create_case(authed_client, surrogate, intended_parent)
    await authed_client.post(f"/cases/{case['id']}/transition", json={"target_stage": "Legal"})

    response = await authed_client.post(
        f"/cases/{case['id']}/transition", json={"target_stage": "Screening"}
    )
    assert response.status_code == 400

    detail = await authed_client.get(f"/cases/{case['id']}")
    assert detail.json()["current_stage"] == "Legal"
    assert len(detail.json()["history"]) == 1


@pytest.mark.asyncio
async def test_timeline_and_next_stage(authed_client, surrogate, intended_parent):
    case = await _create_case(authed_client, surrogate, intended_parent)
    await authed_client.post(f"/cases/{case['id']}/progress", json={})

    response = await authed_client.get(f"/cases/{case['id']}/timeline")
    assert response.status_code == 200
    stages = response.json()["stages"]
    assert stages[0]["status"] == "completed"
    assert stages[0]["completed_at"] is not None
    assert stages[1]["status"] == "current"
    assert stages[2]["status"] == "upcoming"

    response = await authed_client.get(f"/cases/{case['id']}/next-stage")
    assert response.json() == {"current_stage": "Screening", "next_stage": "Medical"}


@pytest.mark.asyncio
async def test_stage_counts_and_filter(authed_client, surrogate, intended_parent):
    first = await _create_case(authed_client, surrogate, intended_parent)
    await _create_case(authed_client, surrogate, intended_parent)
    await authed_client.post(f"/cases/{first['id']}/progress", json={})

    response = await authed_client.get("/cases/stage-counts")
    data = response.json()
    assert data["counts"]["Matching"] == 1
    assert data["counts"]["Screening"] == 1
    assert data["total"] == 2

    response = await authed_client.get("/cases", params={"stage": "Screening"})
    assert response.json()["total"] == 1


def test_stale_case_raises_conflict(db, surrogate, intended_parent):
    """The UPDATE only applies while the stored stage is still the one read."""
    case = SurrogacyCase(
        surrogate_id=surrogate.id,
        parent_id=intended_parent.id,
        surrogate_name="Jamie Carrier",
        parent_name="Morgan Parent",
        current_stage="Matching",
    )
    db.add(case)
    db.commit()

    milestone_service.progress_case(db, case, actor_user_id=None)
    assert case.current_stage == "Screening"

    # Another writer moves the row without this session noticing
    db.execute(
        update(SurrogacyCase)
        .where(SurrogacyCase.id == case.id)
        .values(current_stage="Medical")
        .execution_options(synchronize_session=False)
    )
    assert case.current_stage == "Screening"
    with pytest.raises(StageConflictError):
        milestone_service.progress_case(db, case, actor_user_id=None)

    db.expire_all()
    assert db.get(SurrogacyCase, case.id).current_stage == "Screening"
    assert db.query(CaseStageHistory).count() == 1


@pytest.mark.asyncio
async def test_unknown_case_404(authed_client):
    response = await authed_client.get("/cases/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
