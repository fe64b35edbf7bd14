"""Baby watch router - pregnancy updates with optional ultrasound images.

Create and update take multipart form fields so an image can ride along.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.config import settings
from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.models import BabyWatchUpdate
from surrogacy_admin.schemas.baby_watch import BabyWatchRead
from surrogacy_admin.services import baby_watch_service, storage_service
from surrogacy_admin.utils.file_upload import content_length_exceeds_limit, get_upload_file_size

router = APIRouter(
    prefix="/baby-watch",
    tags=["Baby Watch"],
    dependencies=[Depends(get_current_session)],
)


def _get_or_404(db: Session, update_id: UUID) -> BabyWatchUpdate:
    update = baby_watch_service.get_update(db, update_id)
    if not update:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Update not found")
    return update


async def _checked_image(request: Request, image: UploadFile | None):
    """Validate an optional upload and return (filename, stream) or None."""
    if image is None or not image.filename:
        return None
    if content_length_exceeds_limit(
        request.headers.get("content-length"), max_size_bytes=settings.MAX_UPLOAD_BYTES
    ):
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Upload too large"
        )
    size = await get_upload_file_size(image)
    try:
        storage_service.validate_image(image.filename, image.content_type, size)
    except storage_service.UploadRejectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return image.filename, image.file


@router.get("", response_model=list[BabyWatchRead])
def list_updates(db: Session = Depends(get_db)):
    """All updates, newest first."""
    return baby_watch_service.list_updates(db)


@router.get("/journey/{journey_id}", response_model=list[BabyWatchRead])
def list_journey_updates(journey_id: UUID, db: Session = Depends(get_db)):
    return baby_watch_service.list_updates(db, journey_id=journey_id)


@router.get("/{update_id}", response_model=BabyWatchRead)
def get_update(update_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, update_id)


@router.post(
    "",
    response_model=BabyWatchRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
async def create_update(
    request: Request,
    journey_id: Annotated[UUID, Form()],
    update_date: Annotated[date, Form()],
    gestational_age_weeks: Annotated[int | None, Form()] = None,
    weight: Annotated[str | None, Form()] = None,
    heart_rate: Annotated[int | None, Form()] = None,
    medical_notes: Annotated[str | None, Form()] = None,
    shared_with_parents: Annotated[bool, Form()] = False,
    image: Annotated[UploadFile | None, File()] = None,
    db: Session = Depends(get_db),
):
    checked = await _checked_image(request, image)
    fields = {
        "gestational_age_weeks": gestational_age_weeks,
        "weight": weight,
        "heart_rate": heart_rate,
        "medical_notes": medical_notes,
        "shared_with_parents": shared_with_parents,
    }
    try:
        return baby_watch_service.create_update(
            db,
            journey_id=journey_id,
            update_date=update_date,
            fields=fields,
            image=checked,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.patch(
    "/{update_id}",
    response_model=BabyWatchRead,
    dependencies=[Depends(require_csrf_header)],
)
async def update_update(
    update_id: UUID,
    request: Request,
    update_date: Annotated[date | None, Form()] = None,
    gestational_age_weeks: Annotated[int | None, Form()] = None,
    weight: Annotated[str | None, Form()] = None,
    heart_rate: Annotated[int | None, Form()] = None,
    medical_notes: Annotated[str | None, Form()] = None,
    shared_with_parents: Annotated[bool | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
    db: Session = Depends(get_db),
):
    """Partial update; omitted fields are left unchanged."""
    update = _get_or_404(db, update_id)
    checked = await _checked_image(request, image)
    fields = {
        "update_date": update_date,
        "gestational_age_weeks": gestational_age_weeks,
        "weight": weight,
        "heart_rate": heart_rate,
        "medical_notes": medical_notes,
        "shared_with_parents": shared_with_parents,
    }
    return baby_watch_service.update_update(db, update, fields=fields, image=checked)


@router.delete(
    "/{update_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_update(update_id: UUID, db: Session = Depends(get_db)):
    baby_watch_service.delete_update(db, _get_or_404(db, update_id))
