"""Baby watch service - pregnancy updates shared with intended parents."""

import logging
from datetime import date
from typing import Any, BinaryIO
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from surrogacy_admin.db.models import BabyWatchUpdate, Journey
from surrogacy_admin.services import storage_service

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "update_date",
    "gestational_age_weeks",
    "weight",
    "heart_rate",
    "medical_notes",
    "shared_with_parents",
)


def list_updates(db: Session, journey_id: UUID | None = None) -> list[BabyWatchUpdate]:
    """Newest update first."""
    query = db.query(BabyWatchUpdate)
    if journey_id:
        query = query.filter(BabyWatchUpdate.journey_id == journey_id)
    return query.order_by(
        BabyWatchUpdate.update_date.desc(), BabyWatchUpdate.created_at.desc()
    ).all()


def get_update(db: Session, update_id: UUID) -> BabyWatchUpdate | None:
    return db.get(BabyWatchUpdate, update_id)


def _store_image(journey_id: UUID, image: tuple[str | None, BinaryIO]) -> tuple[str, str]:
    filename, stream = image
    key = storage_service.build_baby_watch_key(str(journey_id), filename)
    url = storage_service.store_file(key, stream)
    return key, url


def _discard_image(storage_key: str | None) -> None:
    if not storage_key:
        return
    try:
        storage_service.delete_file(storage_key)
    except OSError:
        logger.warning("Could not delete stored image %s", storage_key, exc_info=True)


def _commit_or_discard(db: Session, new_key: str | None) -> None:
    """Commit; on failure roll back and remove the image stored for this write."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        _discard_image(new_key)
        raise


def create_update(
    db: Session,
    *,
    journey_id: UUID,
    update_date: date,
    fields: dict[str, Any],
    image: tuple[str | None, BinaryIO] | None = None,
) -> BabyWatchUpdate:
    """
    Create an update, storing the image first when one is given.

    Raises:
        ValueError: Journey not found
    """
    if not db.get(Journey, journey_id):
        raise ValueError("Journey not found")

    update = BabyWatchUpdate(journey_id=journey_id, update_date=update_date)
    for field in EDITABLE_FIELDS:
        if field in fields and fields[field] is not None:
            setattr(update, field, fields[field])

    if image is not None:
        update.image_path, update.image_url = _store_image(journey_id, image)

    db.add(update)
    _commit_or_discard(db, update.image_path)
    db.refresh(update)
    return update


def update_update(
    db: Session,
    update: BabyWatchUpdate,
    *,
    fields: dict[str, Any],
    image: tuple[str | None, BinaryIO] | None = None,
) -> BabyWatchUpdate:
    """Apply provided fields; a new image replaces the old one."""
    for field in EDITABLE_FIELDS:
        if field in fields and fields[field] is not None:
            setattr(update, field, fields[field])

    old_path = new_path = None
    if image is not None:
        old_path = update.image_path
        new_path, update.image_url = _store_image(update.journey_id, image)
        update.image_path = new_path

    _commit_or_discard(db, new_path)
    db.refresh(update)
    _discard_image(old_path)
    return update


def delete_update(db: Session, update: BabyWatchUpdate) -> None:
    """Delete the row, then the stored image (best effort)."""
    image_path = update.image_path
    db.delete(update)
    db.commit()
    _discard_image(image_path)
