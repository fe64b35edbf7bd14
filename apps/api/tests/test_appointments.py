"""Tests for appointment endpoints."""
import pytest


@pytest.mark.asyncio
async def test_create_defaults_and_participant_name(authed_client, surrogate):
    response = await authed_client.post(
        "/appointments",
        json={
            "title": "Psych eval",
            "type": "psychological",
            "appointment_date": "2026-11-03",
            "participant_id": str(surrogate.id),
        },
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["status"] == "scheduled"
    assert data["participant_name"] == "Jamie Carrier"


@pytest.mark.asyncio
async def test_list_order_and_type_filter(authed_client):
    for title, day, at, kind in [
        ("early", "2026-11-01", "08:00:00", "medical"),
        ("late", "2026-11-01", "15:00:00", "legal"),
        ("next", "2026-11-05", None, "medical"),
    ]:
        await authed_client.post(
            "/appointments",
            json={"title": title, "appointment_date": day, "appointment_time": at, "type": kind},
        )

    response = await authed_client.get("/appointments")
    assert [a["title"] for a in response.json()] == ["next", "early", "late"]

    response = await authed_client.get("/appointments", params={"type": "medical"})
    assert {a["title"] for a in response.json()} == {"early", "next"}


@pytest.mark.asyncio
async def test_update_and_delete(authed_client):
    created = (
        await authed_client.post(
            "/appointments", json={"title": "Consult", "appointment_date": "2026-11-01"}
        )
    ).json()

    response = await authed_client.patch(
        f"/appointments/{created['id']}", json={"status": "confirmed", "location": "Office"}
    )
    assert response.json()["status"] == "confirmed"
    assert response.json()["location"] == "Office"

    assert (await authed_client.delete(f"/appointments/{created['id']}")).status_code == 204
    assert (await authed_client.get(f"/appointments/{created['id']}")).status_code == 404
