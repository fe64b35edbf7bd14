"""Pydantic schemas for screenings, medical records and medications."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import (
    MedicalRecordStatus,
    MedicalRecordType,
    MedicationStatus,
    ScreeningStatus,
)
from surrogacy_admin.schemas.document import DocumentRead


# =============================================================================
# Screenings
# =============================================================================

class ScreeningCreate(BaseModel):
    surrogate_id: UUID
    screening_type: str | None = Field(None, max_length=50)
    clinic_name: str | None = Field(None, max_length=255)
    physician_name: str | None = Field(None, max_length=255)
    results: dict[str, Any] | None = None
    notes: str | None = None
    status: ScreeningStatus = ScreeningStatus.PENDING


class ScreeningReview(BaseModel):
    """Review decision recorded by staff."""
    status: ScreeningStatus
    review_notes: str | None = None


class ScreeningRead(BaseModel):
    id: UUID
    surrogate_id: UUID
    surrogate_name: str | None = None
    status: str
    screening_type: str | None
    clinic_name: str | None
    physician_name: str | None
    results: dict[str, Any] | None
    notes: str | None
    submitted_at: datetime
    reviewed_at: datetime | None
    reviewed_by_user_id: UUID | None
    review_notes: str | None
    clearance_date: date | None
    documents: list[DocumentRead] = []

    model_config = {"from_attributes": True}


# =============================================================================
# Medical records
# =============================================================================

class MedicalRecordCreate(BaseModel):
    surrogate_id: UUID
    record_type: MedicalRecordType = MedicalRecordType.OTHER
    title: str = Field(..., min_length=1, max_length=255)
    record_date: date
    provider: str | None = Field(None, max_length=255)
    status: MedicalRecordStatus = MedicalRecordStatus.PENDING
    notes: str | None = None
    file_url: str | None = None


class MedicalRecordUpdate(BaseModel):
    record_type: MedicalRecordType | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    record_date: date | None = None
    provider: str | None = Field(None, max_length=255)
    status: MedicalRecordStatus | None = None
    notes: str | None = None
    file_url: str | None = None


class MedicalRecordRead(BaseModel):
    id: UUID
    surrogate_id: UUID
    record_type: str
    title: str
    record_date: date
    provider: str | None
    status: str
    notes: str | None
    file_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Medications
# =============================================================================

class MedicationCreate(BaseModel):
    surrogate_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str | None = Field(None, max_length=100)
    frequency: str | None = Field(None, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    prescribed_by: str | None = Field(None, max_length=255)
    status: MedicationStatus = MedicationStatus.ACTIVE
    notes: str | None = None


class MedicationUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    dosage: str | None = Field(None, max_length=100)
    frequency: str | None = Field(None, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    prescribed_by: str | None = Field(None, max_length=255)
    status: MedicationStatus | None = None
    notes: str | None = None


class MedicationRead(BaseModel):
    id: UUID
    surrogate_id: UUID
    name: str
    dosage: str | None
    frequency: str | None
    start_date: date | None
    end_date: date | None
    prescribed_by: str | None
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
