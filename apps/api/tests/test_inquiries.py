"""Tests for the new-inquiry triage queue."""
import pytest

from surrogacy_admin.db.enums import UserRole


@pytest.mark.asyncio
async def test_lists_only_new_parent_inquiries(authed_client, intended_parent, surrogate, user_factory):
    user_factory(UserRole.INTENDED_PARENT, status="Intake in Progress")

    response = await authed_client.get("/inquiries")
    assert response.status_code == 200
    data = response.json()
    assert [i["id"] for i in data] == [str(intended_parent.id)]
    assert data[0]["display_name"] == "Morgan Parent"


@pytest.mark.asyncio
async def test_update_status_removes_from_queue(authed_client, intended_parent):
    response = await authed_client.patch(
        f"/inquiries/{intended_parent.id}/status",
        json={"status": "Consultation Complete", "admin_notes": "Booked call"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Consultation Complete"
    assert response.json()["admin_notes"] == "Booked call"

    assert (await authed_client.get("/inquiries")).json() == []


@pytest.mark.asyncio
async def test_update_status_rejects_surrogate_only_value(authed_client, intended_parent):
    response = await authed_client.patch(
        f"/inquiries/{intended_parent.id}/status", json={"status": "Pre-Screen"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_archive(authed_client, intended_parent):
    response = await authed_client.post(f"/inquiries/{intended_parent.id}/archive")
    assert response.status_code == 200
    assert response.json()["status"] == "Declined / Inactive"


@pytest.mark.asyncio
async def test_surrogate_is_not_an_inquiry(authed_client, surrogate):
    response = await authed_client.post(f"/inquiries/{surrogate.id}/archive")
    assert response.status_code == 404
