"""Appointment service - agency calendar entries."""

from enum import Enum
from uuid import UUID

from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import AppointmentType
from surrogacy_admin.db.models import Appointment, User
from surrogacy_admin.schemas.appointment import AppointmentCreate, AppointmentUpdate
from surrogacy_admin.utils.display_names import resolve_display_name

REQUIRED_FIELDS = ("title", "type", "status", "appointment_date")


def _participant_name(db: Session, participant_id: UUID | None) -> str | None:
    if participant_id is None:
        return None
    user = db.get(User, participant_id)
    if not user:
        raise ValueError("Participant not found")
    return resolve_display_name(user)


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def list_appointments(
    db: Session, appointment_type: AppointmentType | None = None
) -> list[Appointment]:
    """Newest day first; within a day, earliest time first."""
    query = db.query(Appointment)
    if appointment_type:
        query = query.filter(Appointment.type == appointment_type.value)
    return query.order_by(
        Appointment.appointment_date.desc(),
        Appointment.appointment_time.asc(),
    ).all()


def get_appointment(db: Session, appointment_id: UUID) -> Appointment | None:
    return db.get(Appointment, appointment_id)


def create_appointment(db: Session, data: AppointmentCreate) -> Appointment:
    values = {field: _plain(value) for field, value in data.model_dump().items()}
    appointment = Appointment(
        **values,
        participant_name=_participant_name(db, data.participant_id),
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def update_appointment(
    db: Session, appointment: Appointment, data: AppointmentUpdate
) -> Appointment:
    update_fields = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in update_fields and update_fields[field] is None:
            del update_fields[field]
    if "participant_id" in update_fields:
        appointment.participant_name = _participant_name(db, update_fields["participant_id"])
    for field, value in update_fields.items():
        setattr(appointment, field, _plain(value))
    db.commit()
    db.refresh(appointment)
    return appointment


def delete_appointment(db: Session, appointment: Appointment) -> None:
    db.delete(appointment)
    db.commit()
