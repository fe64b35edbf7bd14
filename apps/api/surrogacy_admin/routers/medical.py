"""Medical router - screenings, medical records and medications."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import ScreeningStatus
from surrogacy_admin.db.models import MedicalScreening
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.document import DocumentCreate, DocumentRead
from surrogacy_admin.schemas.medical import (
    MedicalRecordCreate,
    MedicalRecordRead,
    MedicalRecordUpdate,
    MedicationCreate,
    MedicationRead,
    MedicationUpdate,
    ScreeningCreate,
    ScreeningRead,
    ScreeningReview,
)
from surrogacy_admin.services import medical_service, screening_service
from surrogacy_admin.utils.display_names import resolve_display_name

screenings_router = APIRouter(
    prefix="/screenings",
    tags=["Screenings"],
    dependencies=[Depends(get_current_session)],
)

router = APIRouter(
    prefix="/medical",
    tags=["Medical"],
    dependencies=[Depends(get_current_session)],
)


# =============================================================================
# Screenings
# =============================================================================

def _screening_to_read(screening: MedicalScreening) -> ScreeningRead:
    read = ScreeningRead.model_validate(screening)
    read.surrogate_name = resolve_display_name(screening.surrogate)
    return read


def _get_screening_or_404(db: Session, screening_id: UUID) -> MedicalScreening:
    screening = screening_service.get_screening(db, screening_id)
    if not screening:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Screening not found")
    return screening


@screenings_router.get("", response_model=list[ScreeningRead])
def list_screenings(
    db: Session = Depends(get_db),
    status_filter: ScreeningStatus | None = Query(None, alias="status"),
):
    return [_screening_to_read(s) for s in screening_service.list_screenings(db, status_filter)]


@screenings_router.get("/surrogate/{surrogate_id}/latest", response_model=ScreeningRead)
def get_latest_screening(surrogate_id: UUID, db: Session = Depends(get_db)):
    screening = screening_service.get_latest_for_surrogate(db, surrogate_id)
    if not screening:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No screening found")
    return _screening_to_read(screening)


@screenings_router.post(
    "",
    response_model=ScreeningRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def submit_screening(data: ScreeningCreate, db: Session = Depends(get_db)):
    try:
        screening = screening_service.submit_screening(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _screening_to_read(_get_screening_or_404(db, screening.id))


@screenings_router.get("/{screening_id}", response_model=ScreeningRead)
def get_screening(screening_id: UUID, db: Session = Depends(get_db)):
    return _screening_to_read(_get_screening_or_404(db, screening_id))


@screenings_router.post(
    "/{screening_id}/review",
    response_model=ScreeningRead,
    dependencies=[Depends(require_csrf_header)],
)
def review_screening(
    screening_id: UUID,
    data: ScreeningReview,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Record a review decision; Cleared/Rejected update the surrogate's clearance."""
    screening = _get_screening_or_404(db, screening_id)
    screening_service.review_screening(
        db,
        screening,
        status=data.status,
        reviewer_id=session.user_id,
        review_notes=data.review_notes,
    )
    return _screening_to_read(_get_screening_or_404(db, screening_id))


@screenings_router.post(
    "/{screening_id}/documents",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def add_screening_document(
    screening_id: UUID, data: DocumentCreate, db: Session = Depends(get_db)
):
    screening = _get_screening_or_404(db, screening_id)
    return screening_service.add_document(db, screening, data)


# =============================================================================
# Medical records
# =============================================================================

def _get_record_or_404(db: Session, record_id: UUID):
    record = medical_service.get_record(db, record_id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medical record not found")
    return record


@router.get("/records", response_model=list[MedicalRecordRead])
def list_records(surrogate_id: UUID | None = None, db: Session = Depends(get_db)):
    return medical_service.list_records(db, surrogate_id)


@router.post(
    "/records",
    response_model=MedicalRecordRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_record(data: MedicalRecordCreate, db: Session = Depends(get_db)):
    try:
        return medical_service.create_record(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/records/{record_id}", response_model=MedicalRecordRead)
def get_record(record_id: UUID, db: Session = Depends(get_db)):
    return _get_record_or_404(db, record_id)


@router.patch(
    "/records/{record_id}",
    response_model=MedicalRecordRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_record(record_id: UUID, data: MedicalRecordUpdate, db: Session = Depends(get_db)):
    return medical_service.update_record(db, _get_record_or_404(db, record_id), data)


@router.delete(
    "/records/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_record(record_id: UUID, db: Session = Depends(get_db)):
    medical_service.delete_record(db, _get_record_or_404(db, record_id))


# =============================================================================
# Medications
# =============================================================================

def _get_medication_or_404(db: Session, medication_id: UUID):
    medication = medical_service.get_medication(db, medication_id)
    if not medication:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medication not found")
    return medication


@router.get("/medications", response_model=list[MedicationRead])
def list_medications(surrogate_id: UUID | None = None, db: Session = Depends(get_db)):
    return medical_service.list_medications(db, surrogate_id)


@router.post(
    "/medications",
    response_model=MedicationRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_medication(data: MedicationCreate, db: Session = Depends(get_db)):
    try:
        return medical_service.create_medication(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/medications/{medication_id}", response_model=MedicationRead)
def get_medication(medication_id: UUID, db: Session = Depends(get_db)):
    return _get_medication_or_404(db, medication_id)


@router.patch(
    "/medications/{medication_id}",
    response_model=MedicationRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_medication(
    medication_id: UUID, data: MedicationUpdate, db: Session = Depends(get_db)
):
    return medical_service.update_medication(db, _get_medication_or_404(db, medication_id), data)


@router.delete(
    "/medications/{medication_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_medication(medication_id: UUID, db: Session = Depends(get_db)):
    medical_service.delete_medication(db, _get_medication_or_404(db, medication_id))
