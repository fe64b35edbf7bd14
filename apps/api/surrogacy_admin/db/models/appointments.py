"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time

from sqlalchemy import Date, ForeignKey, Index, String, Text, Time, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import AppointmentStatus, AppointmentType


class Appointment(Base):
    """Scheduled meeting with a participant (consultation, medical, legal...)."""

    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_date_time", "appointment_date", "appointment_time"),
        Index("idx_appointments_type", "type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentType.GENERAL.value
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AppointmentStatus.SCHEDULED.value
    )
    appointment_date: Mapped[date] = mapped_column(Date, nullable=False)
    appointment_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    participant_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    participant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )
