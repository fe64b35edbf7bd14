"""Pydantic schemas for appointments."""

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import AppointmentStatus, AppointmentType


class AppointmentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: AppointmentType = AppointmentType.GENERAL
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    appointment_date: date
    appointment_time: time | None = None
    duration_minutes: int | None = Field(None, ge=1, le=24 * 60)
    location: str | None = Field(None, max_length=255)
    participant_id: UUID | None = None
    notes: str | None = None


class AppointmentUpdate(BaseModel):
    """Partial update."""
    title: str | None = Field(None, min_length=1, max_length=255)
    type: AppointmentType | None = None
    status: AppointmentStatus | None = None
    appointment_date: date | None = None
    appointment_time: time | None = None
    duration_minutes: int | None = Field(None, ge=1, le=24 * 60)
    location: str | None = Field(None, max_length=255)
    participant_id: UUID | None = None
    notes: str | None = None


class AppointmentRead(BaseModel):
    id: UUID
    title: str
    type: str
    status: str
    appointment_date: date
    appointment_time: time | None
    duration_minutes: int | None
    location: str | None
    participant_id: UUID | None
    participant_name: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
