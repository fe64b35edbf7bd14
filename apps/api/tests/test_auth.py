"""Tests for session auth, role gating and CSRF protection."""
import pytest
from httpx import ASGITransport, AsyncClient

from surrogacy_admin.core.deps import COOKIE_NAME
from surrogacy_admin.main import app


@pytest.mark.asyncio
async def test_requires_cookie(client):
    response = await client.get("/cases")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token(client):
    client.cookies.set(COOKIE_NAME, "not-a-jwt")
    response = await client.get("/cases")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_participant_token_forbidden(client, surrogate, token_for):
    client.cookies.set(COOKIE_NAME, token_for(surrogate))
    response = await client.get("/cases")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_revoked_token(client, db, staff_user, token_for):
    token = token_for(staff_user)
    staff_user.token_version += 1
    db.commit()

    client.cookies.set(COOKIE_NAME, token)
    response = await client.get("/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_inactive_user(client, db, staff_user, token_for):
    client.cookies.set(COOKIE_NAME, token_for(staff_user))
    staff_user.is_active = False
    db.commit()
    response = await client.get("/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me(authed_client, staff_user):
    response = await authed_client.get("/auth/me")
    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(staff_user.id),
        "email": staff_user.email,
        "display_name": "Casey Staff",
        "role": "Agency Staff",
    }


@pytest.mark.asyncio
async def test_mutation_without_csrf_header(client, staff_user, token_for):
    client.cookies.set(COOKIE_NAME, token_for(staff_user))
    response = await client.post("/tasks", json={"title": "No header"})
    assert response.status_code == 403

    response = await client.get("/tasks")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_logout_clears_cookie(authed_client):
    response = await authed_client.post("/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"status": "logged_out"}
    assert COOKIE_NAME in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_request_id_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_unhandled_error_returns_500(db, monkeypatch, staff_user, token_for):
    from surrogacy_admin.core.deps import get_db
    from surrogacy_admin.services import task_service

    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(task_service, "list_tasks", boom)
    app.dependency_overrides[get_db] = lambda: db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
            cookies={COOKIE_NAME: token_for(staff_user)},
        ) as c:
            response = await c.get("/tasks")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
