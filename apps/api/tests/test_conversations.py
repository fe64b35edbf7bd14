"""Tests for conversations: previews, unread counters, idempotent create."""
import pytest

from surrogacy_admin.core.deps import COOKIE_NAME
from surrogacy_admin.db.enums import UserRole
from surrogacy_admin.services.messaging_service import message_preview


async def _open(authed_client, user):
    response = await authed_client.post("/conversations", json={"user_id": str(user.id)})
    assert response.status_code in (200, 201), response.text
    return response


@pytest.mark.asyncio
async def test_create_is_idempotent(authed_client, admin_user):
    first = await _open(authed_client, admin_user)
    assert first.status_code == 201
    names = {p["display_name"] for p in first.json()["participants"]}
    assert names == {"Casey Staff", "Robin Admin"}

    second = await _open(authed_client, admin_user)
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]


@pytest.mark.asyncio
async def test_cannot_message_self(authed_client, staff_user):
    response = await authed_client.post("/conversations", json={"user_id": str(staff_user.id)})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_send_updates_preview_and_unread(authed_client, admin_client, admin_user):
    conversation = (await _open(authed_client, admin_user)).json()
    url = f"/conversations/{conversation['id']}"

    response = await authed_client.post(f"{url}/messages", json={"content": "Hello there"})
    assert response.status_code == 201
    assert response.json()["sender_name"] == "Casey Staff"

    await authed_client.post(
        f"{url}/messages",
        json={"media_url": "https://files.test/u.png", "media_type": "image"},
    )

    mine = (await authed_client.get("/conversations")).json()[0]
    assert mine["last_message"] == "Sent a image"
    assert mine["unread_count"] == 0

    theirs = (await admin_client.get("/conversations")).json()[0]
    assert theirs["unread_count"] == 2

    response = await admin_client.post(f"{url}/read")
    assert response.json()["unread_count"] == 0

    detail = (await admin_client.get(url)).json()
    assert [m["content"] for m in detail["messages"]] == ["Hello there", None]


@pytest.mark.asyncio
async def test_non_participant_cannot_send(
    authed_client, client, admin_user, user_factory, token_for
):
    conversation = (await _open(authed_client, admin_user)).json()
    outsider = user_factory(UserRole.AGENCY_STAFF, first_name="Out", last_name="Sider")

    client.cookies.set(COOKIE_NAME, token_for(outsider))
    response = await client.post(
        f"/conversations/{conversation['id']}/messages",
        json={"content": "hi"},
        headers={"X-Requested-With": "XMLHttpRequest"},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_empty_message_rejected(authed_client, admin_user):
    conversation = (await _open(authed_client, admin_user)).json()
    response = await authed_client.post(
        f"/conversations/{conversation['id']}/messages", json={"content": "   "}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_clear_and_delete(authed_client, admin_user):
    conversation = (await _open(authed_client, admin_user)).json()
    url = f"/conversations/{conversation['id']}"
    sent = (await authed_client.post(f"{url}/messages", json={"content": "one"})).json()
    await authed_client.post(f"{url}/messages", json={"content": "two"})

    response = await authed_client.delete(f"{url}/messages/{sent['id']}")
    assert response.status_code == 204

    response = await authed_client.post(f"{url}/clear")
    assert response.json()["last_message"] == "Chat cleared"
    assert (await authed_client.get(url)).json()["messages"] == []

    response = await authed_client.delete(url)
    assert response.status_code == 204
    assert (await authed_client.get(url)).status_code == 404


def test_message_preview_truncates():
    assert message_preview("x" * 150, None) == "x" * 100
    assert message_preview(None, "video") == "Sent a video"
