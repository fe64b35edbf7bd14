"""Screening service - medical screening submissions and staff review."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.enums import ScreeningStatus, UserRole
from surrogacy_admin.db.models import Document, MedicalScreening, User
from surrogacy_admin.schemas.document import DocumentCreate
from surrogacy_admin.schemas.medical import ScreeningCreate

logger = logging.getLogger(__name__)

# Decisions copied onto the surrogate's medical_clearance_status
CLEARANCE_DECISIONS = frozenset({ScreeningStatus.CLEARED, ScreeningStatus.REJECTED})


def list_screenings(
    db: Session, status: ScreeningStatus | None = None
) -> list[MedicalScreening]:
    """Most recently submitted first."""
    query = db.query(MedicalScreening).options(selectinload(MedicalScreening.surrogate))
    if status:
        query = query.filter(MedicalScreening.status == status.value)
    return query.order_by(MedicalScreening.submitted_at.desc()).all()


def get_screening(db: Session, screening_id: UUID) -> MedicalScreening | None:
    return (
        db.query(MedicalScreening)
        .options(
            selectinload(MedicalScreening.documents),
            selectinload(MedicalScreening.surrogate),
        )
        .filter(MedicalScreening.id == screening_id)
        .first()
    )


def get_latest_for_surrogate(db: Session, surrogate_id: UUID) -> MedicalScreening | None:
    return (
        db.query(MedicalScreening)
        .options(selectinload(MedicalScreening.documents))
        .filter(MedicalScreening.surrogate_id == surrogate_id)
        .order_by(MedicalScreening.submitted_at.desc())
        .first()
    )


def submit_screening(db: Session, data: ScreeningCreate) -> MedicalScreening:
    surrogate = db.get(User, data.surrogate_id)
    if not surrogate or surrogate.role != UserRole.SURROGATE.value:
        raise ValueError("Surrogate not found")

    screening = MedicalScreening(
        surrogate_id=data.surrogate_id,
        status=data.status.value,
        screening_type=data.screening_type,
        clinic_name=data.clinic_name,
        physician_name=data.physician_name,
        results=data.results,
        notes=data.notes,
    )
    db.add(screening)
    db.commit()
    db.refresh(screening)
    logger.info("Screening %s submitted", screening.id)
    return screening


def review_screening(
    db: Session,
    screening: MedicalScreening,
    *,
    status: ScreeningStatus,
    reviewer_id: UUID,
    review_notes: str | None = None,
) -> MedicalScreening:
    """
    Record a review decision.

    Cleared stamps clearance_date. Cleared/Rejected are then copied to the
    surrogate's medical_clearance_status; a failure there is logged and does
    not undo the review.
    """
    screening.status = status.value
    screening.reviewed_at = utcnow()
    screening.reviewed_by_user_id = reviewer_id
    if review_notes is not None:
        screening.review_notes = review_notes
    if status == ScreeningStatus.CLEARED:
        screening.clearance_date = date.today()
    db.commit()
    db.refresh(screening)
    logger.info("Screening %s reviewed: %s", screening.id, screening.status)

    if status in CLEARANCE_DECISIONS:
        _sync_clearance(db, screening.surrogate_id, status)

    return screening


def _sync_clearance(db: Session, surrogate_id: UUID, status: ScreeningStatus) -> None:
    try:
        surrogate = db.get(User, surrogate_id)
        if surrogate is None:
            logger.warning("Clearance sync skipped: surrogate %s missing", surrogate_id)
            return
        surrogate.medical_clearance_status = status.value
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Clearance sync failed for surrogate %s", surrogate_id, exc_info=True)


def add_document(db: Session, screening: MedicalScreening, data: DocumentCreate) -> Document:
    document = Document(
        screening_id=screening.id,
        name=data.name,
        url=data.url,
        document_type=data.document_type,
        status=data.status.value,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document
