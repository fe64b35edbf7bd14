"""Tests for dashboard summary and upcoming widgets."""
from datetime import date, timedelta

import pytest

from surrogacy_admin.db.models import Appointment, MedicalScreening, Task
from surrogacy_admin.services import dashboard_service


@pytest.mark.asyncio
async def test_summary_counts(authed_client, db, surrogate, intended_parent):
    surrogate.profile_completed = True
    db.add_all(
        [
            Task(title="late", due_date=date.today() - timedelta(days=2)),
            Task(title="open"),
            Task(title="done", is_completed=True),
            MedicalScreening(surrogate_id=surrogate.id, status="Pending"),
            MedicalScreening(surrogate_id=surrogate.id, status="Cleared"),
        ]
    )
    db.commit()
    await authed_client.post(
        "/cases", json={"surrogate_id": str(surrogate.id), "parent_id": str(intended_parent.id)}
    )

    response = await authed_client.get("/dashboard/summary")
    assert response.status_code == 200
    data = response.json()
    assert data["participants"]["Surrogate"] == {"total": 1, "profile_completed": 1}
    assert data["participants"]["Intended Parent"] == {"total": 1, "profile_completed": 0}
    assert data["open_tasks"] == 2
    assert data["overdue_tasks"] == 1
    assert data["pending_screenings"] == 1
    assert data["new_inquiries"] == 1
    assert data["cases_by_stage"]["Matching"] == 1
    assert data["matches_by_status"]["Proposed"] == 0


def test_upcoming_window(db):
    today = date(2026, 10, 19)
    db.add_all(
        [
            Task(title="overdue", due_date=today - timedelta(days=3)),
            Task(title="soon", due_date=today + timedelta(days=2)),
            Task(title="far", due_date=today + timedelta(days=30)),
            Task(title="closed", due_date=today, is_completed=True),
            Appointment(title="Consult", appointment_date=today + timedelta(days=1)),
            Appointment(
                title="Cancelled visit",
                appointment_date=today + timedelta(days=1),
                status="cancelled",
            ),
            Appointment(title="Past", appointment_date=today - timedelta(days=1)),
        ]
    )
    db.commit()

    tasks, appointments = dashboard_service.get_upcoming_items(
        db, days=7, include_overdue=True, today=today
    )
    assert [t.title for t in tasks] == ["overdue", "soon"]
    assert [a.title for a in appointments] == ["Consult"]

    tasks, _ = dashboard_service.get_upcoming_items(db, days=7, include_overdue=False, today=today)
    assert [t.title for t in tasks] == ["soon"]


@pytest.mark.asyncio
async def test_upcoming_endpoint(authed_client):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    await authed_client.post("/tasks", json={"title": "Follow up", "due_date": tomorrow})
    await authed_client.post(
        "/appointments",
        json={"title": "Legal call", "appointment_date": tomorrow, "appointment_time": "09:30:00"},
    )

    response = await authed_client.get("/dashboard/upcoming", params={"days": 3})
    data = response.json()
    assert [t["title"] for t in data["tasks"]] == ["Follow up"]
    assert data["appointments"][0]["appointment_time"] == "09:30:00"
    assert data["appointments"][0]["type"] == "general"

    response = await authed_client.get("/dashboard/upcoming", params={"days": 30})
    assert response.status_code == 422
