"""Inquiries router - triage of new intended-parent inquiries."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.models import User
from surrogacy_admin.schemas.participant import (
    ParticipantListItem,
    ParticipantRead,
    ParticipantStatusUpdate,
)
from surrogacy_admin.services import inquiry_service, participant_service

router = APIRouter(
    prefix="/inquiries",
    tags=["Inquiries"],
    dependencies=[Depends(get_current_session)],
)


def _get_or_404(db: Session, user_id: UUID) -> User:
    user = inquiry_service.get_inquiry(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inquiry not found")
    return user


@router.get("", response_model=list[ParticipantListItem])
def list_inquiries(db: Session = Depends(get_db)):
    """Intended parents with status New Inquiry, newest first."""
    inquiries = inquiry_service.list_new_inquiries(db)
    return [participant_service.to_participant_list_item(u) for u in inquiries]


@router.patch(
    "/{user_id}/status",
    response_model=ParticipantRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_inquiry_status(
    user_id: UUID, data: ParticipantStatusUpdate, db: Session = Depends(get_db)
):
    user = _get_or_404(db, user_id)
    try:
        user = inquiry_service.update_inquiry_status(db, user, data.status, data.admin_notes)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return participant_service.to_participant_read(user)


@router.post(
    "/{user_id}/archive",
    response_model=ParticipantRead,
    dependencies=[Depends(require_csrf_header)],
)
def archive_inquiry(user_id: UUID, db: Session = Depends(get_db)):
    """Mark the inquiry Declined / Inactive."""
    user = inquiry_service.archive_inquiry(db, _get_or_404(db, user_id))
    return participant_service.to_participant_read(user)
