"""Appointments router."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import AppointmentType
from surrogacy_admin.schemas.appointment import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentUpdate,
)
from surrogacy_admin.services import appointment_service

router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(get_current_session)],
)


def _get_or_404(db: Session, appointment_id: UUID):
    appointment = appointment_service.get_appointment(db, appointment_id)
    if not appointment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    return appointment


@router.get("", response_model=list[AppointmentRead])
def list_appointments(
    db: Session = Depends(get_db),
    appointment_type: AppointmentType | None = Query(None, alias="type"),
):
    return appointment_service.list_appointments(db, appointment_type)


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_appointment(data: AppointmentCreate, db: Session = Depends(get_db)):
    try:
        return appointment_service.create_appointment(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{appointment_id}", response_model=AppointmentRead)
def get_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, appointment_id)


@router.patch(
    "/{appointment_id}",
    response_model=AppointmentRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_appointment(
    appointment_id: UUID, data: AppointmentUpdate, db: Session = Depends(get_db)
):
    appointment = _get_or_404(db, appointment_id)
    try:
        return appointment_service.update_appointment(db, appointment, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_appointment(appointment_id: UUID, db: Session = Depends(get_db)):
    appointment_service.delete_appointment(db, _get_or_404(db, appointment_id))
