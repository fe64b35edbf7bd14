"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import uuid
from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import JourneyStatus, MilestoneStatus
from surrogacy_admin.db.types import JSONType

if TYPE_CHECKING:
    from surrogacy_admin.db.models import Document, Match, User


class Journey(Base):
    """
    End-to-end surrogacy journey, usually created from an accepted match.

    status walks the journey track (Medical Screening → ... → Completed) and
    may jump to the terminal Cancelled state from any non-final stage.
    """

    __tablename__ = "journeys"
    __table_args__ = (
        Index("idx_journeys_status_created", "status", "created_at"),
        Index("ix_journeys_match_id", "match_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    case_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    match_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("matches.id", ondelete="SET NULL"), nullable=True
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    surrogate_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    case_manager_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=JourneyStatus.MEDICAL_SCREENING.value
    )
    estimated_delivery_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Free-form staff material, shape owned by the UI
    medical_records: Mapped[list[Any] | None] = mapped_column(JSONType, nullable=True)
    legal_agreements: Mapped[list[Any] | None] = mapped_column(JSONType, nullable=True)
    journey_notes: Mapped[list[Any] | None] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    match: Mapped["Match | None"] = relationship()
    parent: Mapped["User | None"] = relationship(foreign_keys=[parent_id])
    surrogate: Mapped["User | None"] = relationship(foreign_keys=[surrogate_id])
    case_manager: Mapped["User | None"] = relationship(foreign_keys=[case_manager_id])
    history: Mapped[list["JourneyStageHistory"]] = relationship(
        back_populates="journey",
        cascade="all, delete-orphan",
        order_by="JourneyStageHistory.completed_at",
    )
    milestones: Mapped[list["JourneyMilestone"]] = relationship(
        back_populates="journey",
        cascade="all, delete-orphan",
        order_by="JourneyMilestone.scheduled_date",
    )
    documents: Mapped[list["Document"]] = relationship(
        back_populates="journey",
        cascade="all, delete-orphan",
    )


class JourneyStageHistory(Base):
    """Append-only log of journey stages that were left (same shape as case history)."""

    __tablename__ = "journey_stage_history"
    __table_args__ = (
        Index("idx_journey_history_journey_completed", "journey_id", "completed_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    journey_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="CASCADE"), nullable=False
    )
    stage: Mapped[str] = mapped_column(String(30), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    completed_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    journey: Mapped["Journey"] = relationship(back_populates="history")


class JourneyMilestone(Base):
    """Scheduled checkpoint within a journey (transfer date, ultrasound, ...)."""

    __tablename__ = "journey_milestones"
    __table_args__ = (
        Index("idx_journey_milestones_journey_scheduled", "journey_id", "scheduled_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    journey_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    scheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MilestoneStatus.PENDING.value
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_to: Mapped[list[str] | None] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    journey: Mapped["Journey"] = relationship(back_populates="milestones")
