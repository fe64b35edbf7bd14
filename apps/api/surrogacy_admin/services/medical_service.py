"""Medical service - surrogate medical records and medications."""

from enum import Enum
from uuid import UUID

from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import UserRole
from surrogacy_admin.db.models import MedicalRecord, Medication, User
from surrogacy_admin.schemas.medical import (
    MedicalRecordCreate,
    MedicalRecordUpdate,
    MedicationCreate,
    MedicationUpdate,
)


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def _require_surrogate(db: Session, surrogate_id: UUID) -> None:
    surrogate = db.get(User, surrogate_id)
    if not surrogate or surrogate.role != UserRole.SURROGATE.value:
        raise ValueError("Surrogate not found")


def _apply(db: Session, row, fields: dict, required: tuple[str, ...]):
    for field, value in fields.items():
        if field in required and value is None:
            continue
        setattr(row, field, _plain(value))
    db.commit()
    db.refresh(row)
    return row


# =============================================================================
# Medical records
# =============================================================================

def list_records(db: Session, surrogate_id: UUID | None = None) -> list[MedicalRecord]:
    query = db.query(MedicalRecord)
    if surrogate_id:
        query = query.filter(MedicalRecord.surrogate_id == surrogate_id)
    return query.order_by(MedicalRecord.record_date.desc(), MedicalRecord.created_at.desc()).all()


def get_record(db: Session, record_id: UUID) -> MedicalRecord | None:
    return db.get(MedicalRecord, record_id)


def create_record(db: Session, data: MedicalRecordCreate) -> MedicalRecord:
    _require_surrogate(db, data.surrogate_id)
    record = MedicalRecord(**{k: _plain(v) for k, v in data.model_dump().items()})
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def update_record(db: Session, record: MedicalRecord, data: MedicalRecordUpdate) -> MedicalRecord:
    return _apply(
        db, record, data.model_dump(exclude_unset=True),
        required=("record_type", "title", "record_date", "status"),
    )


def delete_record(db: Session, record: MedicalRecord) -> None:
    db.delete(record)
    db.commit()


# =============================================================================
# Medications
# =============================================================================

def list_medications(db: Session, surrogate_id: UUID | None = None) -> list[Medication]:
    query = db.query(Medication)
    if surrogate_id:
        query = query.filter(Medication.surrogate_id == surrogate_id)
    return query.order_by(Medication.start_date.desc(), Medication.created_at.desc()).all()


def get_medication(db: Session, medication_id: UUID) -> Medication | None:
    return db.get(Medication, medication_id)


def create_medication(db: Session, data: MedicationCreate) -> Medication:
    _require_surrogate(db, data.surrogate_id)
    medication = Medication(**{k: _plain(v) for k, v in data.model_dump().items()})
    db.add(medication)
    db.commit()
    db.refresh(medication)
    return medication


def update_medication(db: Session, medication: Medication, data: MedicationUpdate) -> Medication:
    return _apply(
        db, medication, data.model_dump(exclude_unset=True),
        required=("name", "status"),
    )


def delete_medication(db: Session, medication: Medication) -> None:
    db.delete(medication)
    db.commit()
