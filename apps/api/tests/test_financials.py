"""Tests for the agency ledger and surrogate payments."""
import pytest


async def _add_transaction(client, **fields):
    payload = {"type": "Revenue", "amount": "100.00", "transaction_date": "2026-06-01"}
    payload.update(fields)
    response = await client.post("/financials/transactions", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_summary_counts_completed_only(authed_client):
    await _add_transaction(authed_client, amount="1500.00", status="Completed")
    await _add_transaction(authed_client, amount="250.50", status="Pending")
    await _add_transaction(authed_client, type="Expense", amount="400.25", status="Completed")
    await _add_transaction(authed_client, type="Expense", amount="99.00", status="Cancelled")

    response = await authed_client.get("/financials/summary")
    assert response.status_code == 200
    assert response.json() == {
        "total_revenue": "1500.00",
        "total_expenses": "400.25",
        "net_income": "1099.75",
        "pending_revenue": "250.50",
    }


@pytest.mark.asyncio
async def test_empty_summary_is_zero(authed_client):
    response = await authed_client.get("/financials/summary")
    assert response.json()["net_income"] == "0.00"


@pytest.mark.asyncio
async def test_transaction_defaults_and_case_number(authed_client, intended_parent):
    journey = await authed_client.post(
        "/journeys", json={"parent_id": str(intended_parent.id), "case_number": "GC-42"}
    )
    data = await _add_transaction(authed_client, journey_id=journey.json()["id"])

    assert data["status"] == "Pending"
    assert data["category"] == "Other"
    assert data["case_number"] == "GC-42"

    response = await authed_client.get(
        "/financials/transactions", params={"journey_id": journey.json()["id"]}
    )
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_transaction_unknown_journey(authed_client):
    response = await authed_client.post(
        "/financials/transactions",
        json={
            "type": "Revenue",
            "amount": "10.00",
            "transaction_date": "2026-06-01",
            "journey_id": "00000000-0000-0000-0000-000000000009",
        },
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_non_positive_amount_rejected(authed_client):
    response = await authed_client.post(
        "/financials/transactions",
        json={"type": "Revenue", "amount": "0", "transaction_date": "2026-06-01"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_keeps_required_fields(authed_client):
    data = await _add_transaction(authed_client)
    response = await authed_client.patch(
        f"/financials/transactions/{data['id']}",
        json={"status": "Completed", "amount": None},
    )
    assert response.json()["status"] == "Completed"
    assert response.json()["amount"] == "100.00"


@pytest.mark.asyncio
async def test_delete_requires_admin(authed_client, admin_client):
    data = await _add_transaction(authed_client)

    response = await authed_client.delete(f"/financials/transactions/{data['id']}")
    assert response.status_code == 403

    response = await admin_client.delete(f"/financials/transactions/{data['id']}")
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_payment_stats(authed_client, surrogate):
    base = {"surrogate_id": str(surrogate.id), "type": "Base Compensation"}
    for amount, status in [
        ("2000.00", "Paid"),
        ("500.00", "Paid"),
        ("750.00", "Pending"),
        ("1000.00", "Scheduled"),
        ("300.00", "Overdue"),
        ("50.00", "Rejected"),
    ]:
        response = await authed_client.post(
            "/payments", json={**base, "amount": amount, "status": status}
        )
        assert response.status_code == 201

    response = await authed_client.get("/payments/stats")
    assert response.json() == {
        "total_paid": "2500.00",
        "pending": "750.00",
        "upcoming": "1000.00",
        "overdue": "300.00",
    }

    response = await authed_client.get("/payments", params={"surrogate_id": str(surrogate.id)})
    assert len(response.json()) == 6
    assert response.json()[0]["surrogate_name"] == "Jamie Carrier"


@pytest.mark.asyncio
async def test_payment_stats_empty(authed_client):
    response = await authed_client.get("/payments/stats")
    assert response.json()["total_paid"] == "0.00"


@pytest.mark.asyncio
async def test_payment_delete_admin_only(authed_client, admin_client):
    created = await authed_client.post(
        "/payments", json={"type": "Travel", "amount": "80.00"}
    )
    payment_id = created.json()["id"]

    assert (await authed_client.delete(f"/payments/{payment_id}")).status_code == 403
    assert (await admin_client.delete(f"/payments/{payment_id}")).status_code == 204
