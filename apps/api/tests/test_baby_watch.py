"""Tests for baby watch updates and their stored images."""
import io
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from sqlalchemy.exc import SQLAlchemyError

from surrogacy_admin.core.config import settings
from surrogacy_admin.db.models import BabyWatchUpdate, Journey
from surrogacy_admin.services import baby_watch_service, storage_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def journey(db, intended_parent, surrogate):
    journey = Journey(
        case_number="J-00001",
        parent_id=intended_parent.id,
        surrogate_id=surrogate.id,
        status="Pregnancy",
    )
    db.add(journey)
    db.commit()
    db.refresh(journey)
    return journey


def _stored_path(media_root: Path, image_url: str) -> Path:
    key = image_url.removeprefix(settings.MEDIA_BASE_URL.rstrip("/") + "/")
    return media_root / key


@pytest.mark.asyncio
async def test_create_with_image(authed_client, journey, media_root):
    response = await authed_client.post(
        "/baby-watch",
        data={
            "journey_id": str(journey.id),
            "update_date": "2026-10-01",
            "gestational_age_weeks": "20",
            "heart_rate": "150",
            "shared_with_parents": "true",
        },
        files={"image": ("scan 1.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["gestational_age_weeks"] == 20
    assert data["shared_with_parents"] is True
    assert data["image_url"].startswith("http://test/media/baby_watch/")
    assert data["image_url"].endswith("_scan_1.png")

    stored = _stored_path(media_root, data["image_url"])
    assert stored.read_bytes() == PNG_BYTES


@pytest.mark.asyncio
async def test_create_without_image(authed_client, journey):
    response = await authed_client.post(
        "/baby-watch",
        data={"journey_id": str(journey.id), "update_date": "2026-10-01"},
    )
    assert response.status_code == 201
    assert response.json()["image_url"] is None
    assert response.json()["shared_with_parents"] is False


@pytest.mark.asyncio
async def test_create_unknown_journey(authed_client):
    response = await authed_client.post(
        "/baby-watch",
        data={"journey_id": "00000000-0000-0000-0000-000000000003", "update_date": "2026-10-01"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rejects_non_image(authed_client, journey):
    response = await authed_client.post(
        "/baby-watch",
        data={"journey_id": str(journey.id), "update_date": "2026-10-01"},
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rejects_oversized_image(authed_client, journey, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)
    response = await authed_client.post(
        "/baby-watch",
        data={"journey_id": str(journey.id), "update_date": "2026-10-01"},
        files={"image": ("scan.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_replaces_image(authed_client, journey, media_root):
    created = (
        await authed_client.post(
            "/baby-watch",
            data={"journey_id": str(journey.id), "update_date": "2026-10-01"},
            files={"image": ("first.png", PNG_BYTES, "image/png")},
        )
    ).json()
    old_file = _stored_path(media_root, created["image_url"])
    assert old_file.exists()

    response = await authed_client.patch(
        f"/baby-watch/{created['id']}",
        data={"medical_notes": "Growing well"},
        files={"image": ("second.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["medical_notes"] == "Growing well"
    assert data["update_date"] == "2026-10-01"
    assert data["image_url"].endswith("_second.png")
    assert not old_file.exists()
    assert _stored_path(media_root, data["image_url"]).exists()


@pytest.mark.asyncio
async def test_delete_removes_file(authed_client, journey, media_root):
    created = (
        await authed_client.post(
            "/baby-watch",
            data={"journey_id": str(journey.id), "update_date": "2026-10-01"},
            files={"image": ("scan.png", PNG_BYTES, "image/png")},
        )
    ).json()
    stored = _stored_path(media_root, created["image_url"])

    response = await authed_client.delete(f"/baby-watch/{created['id']}")
    assert response.status_code == 204
    assert not stored.exists()
    assert (await authed_client.get(f"/baby-watch/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_list_newest_first(authed_client, journey):
    for day in ("2026-09-01", "2026-10-01"):
        await authed_client.post(
            "/baby-watch", data={"journey_id": str(journey.id), "update_date": day}
        )

    response = await authed_client.get(f"/baby-watch/journey/{journey.id}")
    assert [u["update_date"] for u in response.json()] == ["2026-10-01", "2026-09-01"]
    assert len((await authed_client.get("/baby-watch")).json()) == 2


def test_storage_key_format():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    key = storage_service.build_baby_watch_key("abc", "../../etc/passwd", now=now)
    assert key == f"baby_watch/abc_{int(now.timestamp() * 1000)}_passwd"


def test_resolve_refuses_escape():
    with pytest.raises(storage_service.UploadRejectedError):
        storage_service.delete_file("../outside.png")


def _fail_commit():
    raise SQLAlchemyError("database unavailable")


def _stored_files(media_root: Path) -> list[Path]:
    return [p for p in media_root.rglob("*") if p.is_file()]


def test_failed_create_leaves_no_image(db, journey, media_root, monkeypatch):
    with monkeypatch.context() as m, pytest.raises(SQLAlchemyError):
        m.setattr(db, "commit", _fail_commit)
        baby_watch_service.create_update(
            db,
            journey_id=journey.id,
            update_date=date(2026, 10, 1),
            fields={},
            image=("scan.png", io.BytesIO(PNG_BYTES)),
        )

    assert _stored_files(media_root) == []
    assert db.query(BabyWatchUpdate).count() == 0


def test_failed_update_keeps_previous_image(db, journey, media_root, monkeypatch):
    update = baby_watch_service.create_update(
        db,
        journey_id=journey.id,
        update_date=date(2026, 10, 1),
        fields={},
        image=("first.png", io.BytesIO(PNG_BYTES)),
    )
    original_path = update.image_path

    with monkeypatch.context() as m, pytest.raises(SQLAlchemyError):
        m.setattr(db, "commit", _fail_commit)
        baby_watch_service.update_update(
            db, update, fields={}, image=("second.png", io.BytesIO(PNG_BYTES))
        )

    assert [p.name for p in _stored_files(media_root)] == [Path(original_path).name]
    db.refresh(update)
    assert update.image_path == original_path
