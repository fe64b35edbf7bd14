"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import uuid
from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import (
    DocumentStatus,
    MedicalRecordStatus,
    MedicationStatus,
    ScreeningStatus,
)
from surrogacy_admin.db.types import JSONType

if TYPE_CHECKING:
    from surrogacy_admin.db.models import Journey, User


class MedicalScreening(Base):
    """
    Medical screening submitted for a surrogate and reviewed by staff.

    A review decision (Cleared / Rejected) is mirrored onto the surrogate's
    medical_clearance_status.
    """

    __tablename__ = "medical_screenings"
    __table_args__ = (
        Index("idx_screenings_surrogate_submitted", "surrogate_id", "submitted_at"),
        Index("idx_screenings_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    surrogate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ScreeningStatus.PENDING.value
    )
    screening_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    clinic_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    physician_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    results: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    reviewed_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    review_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    clearance_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    surrogate: Mapped["User"] = relationship(foreign_keys=[surrogate_id])
    reviewed_by: Mapped["User | None"] = relationship(foreign_keys=[reviewed_by_user_id])
    documents: Mapped[list["Document"]] = relationship(
        back_populates="screening",
        cascade="all, delete-orphan",
        order_by="Document.uploaded_at",
    )


class Document(Base):
    """Uploaded file attached to a screening or a journey."""

    __tablename__ = "documents"
    __table_args__ = (
        Index("idx_documents_screening", "screening_id"),
        Index("idx_documents_journey", "journey_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    screening_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("medical_screenings.id", ondelete="CASCADE"), nullable=True
    )
    journey_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    document_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DocumentStatus.PENDING.value
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )

    screening: Mapped["MedicalScreening | None"] = relationship(back_populates="documents")
    journey: Mapped["Journey | None"] = relationship(back_populates="documents")


class MedicalRecord(Base):
    """Clinical record (ultrasound, lab result, ...) for a surrogate."""

    __tablename__ = "medical_records"
    __table_args__ = (
        Index("idx_medical_records_surrogate_date", "surrogate_id", "record_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    surrogate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    record_type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    record_date: Mapped[date] = mapped_column(Date, nullable=False)
    provider: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MedicalRecordStatus.PENDING.value
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )


class Medication(Base):
    """Medication prescribed to a surrogate during the journey."""

    __tablename__ = "medications"
    __table_args__ = (
        Index("idx_medications_surrogate_start", "surrogate_id", "start_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    surrogate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str | None] = mapped_column(String(100), nullable=True)
    frequency: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    prescribed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MedicationStatus.ACTIVE.value
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )
