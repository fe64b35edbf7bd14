"""Tests for task endpoints."""
from datetime import date, timedelta

import pytest

from surrogacy_admin.db.models import Task
from surrogacy_admin.services import task_service


@pytest.mark.asyncio
async def test_create_task_with_assignee(authed_client, staff_user):
    response = await authed_client.post(
        "/tasks",
        json={"title": "Call clinic", "assignee_id": str(staff_user.id)},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["assignee_name"] == "Casey Staff"
    assert data["created_by_user_id"] == str(staff_user.id)
    assert data["is_completed"] is False


@pytest.mark.asyncio
async def test_unknown_assignee(authed_client):
    response = await authed_client.post(
        "/tasks",
        json={"title": "Call clinic", "assignee_id": "00000000-0000-0000-0000-000000000001"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_overdue_flag(authed_client):
    yesterday = (date.today() - timedelta(days=1)).isoformat()
    response = await authed_client.post(
        "/tasks", json={"title": "Send contract", "due_date": yesterday}
    )
    task = response.json()
    assert task["is_overdue"] is True

    response = await authed_client.post(f"/tasks/{task['id']}/toggle")
    assert response.json()["is_completed"] is True
    assert response.json()["completed_at"] is not None
    assert response.json()["is_overdue"] is False

    response = await authed_client.post(f"/tasks/{task['id']}/toggle")
    assert response.json()["is_completed"] is False
    assert response.json()["completed_at"] is None


def test_is_overdue_rules():
    today = date(2026, 5, 10)
    assert task_service.is_overdue(Task(title="a", due_date=date(2026, 5, 9), is_completed=False), today)
    assert not task_service.is_overdue(Task(title="b", due_date=today, is_completed=False), today)
    assert not task_service.is_overdue(Task(title="c", due_date=None, is_completed=False), today)
    assert not task_service.is_overdue(Task(title="d", due_date=date(2026, 1, 1), is_completed=True), today)


@pytest.mark.asyncio
async def test_list_orders_by_due_date(authed_client):
    await authed_client.post("/tasks", json={"title": "undated"})
    await authed_client.post("/tasks", json={"title": "later", "due_date": "2030-01-02"})
    await authed_client.post("/tasks", json={"title": "sooner", "due_date": "2030-01-01"})

    response = await authed_client.get("/tasks")
    titles = [t["title"] for t in response.json()["items"]]
    assert titles == ["sooner", "later", "undated"]

    response = await authed_client.get("/tasks", params={"is_completed": "false", "per_page": 2})
    assert response.json()["total"] == 3
    assert response.json()["pages"] == 2


@pytest.mark.asyncio
async def test_update_and_delete(authed_client):
    created = (await authed_client.post("/tasks", json={"title": "Draft"})).json()

    response = await authed_client.patch(
        f"/tasks/{created['id']}", json={"title": "Final", "description": "notes"}
    )
    assert response.json()["title"] == "Final"

    response = await authed_client.delete(f"/tasks/{created['id']}")
    assert response.status_code == 204
    assert (await authed_client.get(f"/tasks/{created['id']}")).status_code == 404
