"""Inquiry service - new intended-parent inquiries awaiting triage."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import ParticipantStatus, UserRole
from surrogacy_admin.db.models import User
from surrogacy_admin.services import participant_service

logger = logging.getLogger(__name__)


def list_new_inquiries(db: Session) -> list[User]:
    """Intended parents still in New Inquiry, newest first."""
    return (
        db.query(User)
        .filter(
            User.role == UserRole.INTENDED_PARENT.value,
            User.status == ParticipantStatus.NEW_INQUIRY.value,
        )
        .order_by(User.created_at.desc())
        .all()
    )


def count_new_inquiries(db: Session) -> int:
    return (
        db.query(User)
        .filter(
            User.role == UserRole.INTENDED_PARENT.value,
            User.status == ParticipantStatus.NEW_INQUIRY.value,
        )
        .count()
    )


def get_inquiry(db: Session, user_id: UUID) -> User | None:
    return participant_service.get_participant(db, UserRole.INTENDED_PARENT, user_id)


def update_inquiry_status(
    db: Session, user: User, status: ParticipantStatus, notes: str | None = None
) -> User:
    """Move an inquiry along; a non-empty note replaces admin_notes."""
    user = participant_service.update_status(db, user, status, notes)
    logger.info("Inquiry %s moved to %s", user.id, status.value)
    return user


def archive_inquiry(db: Session, user: User) -> User:
    return update_inquiry_status(db, user, ParticipantStatus.DECLINED_INACTIVE)
