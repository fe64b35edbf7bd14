"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import CaseStage

if TYPE_CHECKING:
    from surrogacy_admin.db.models import User


class SurrogacyCase(Base):
    """
    Milestone tracker for one surrogate / intended parent pairing.

    current_stage is always a CaseStage value. Stage changes go through
    services.stage_progression so that every move appends one history row.
    """

    __tablename__ = "cases"
    __table_args__ = (
        Index("idx_cases_stage_updated", "current_stage", "updated_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    surrogate_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    # Denormalized for list views
    surrogate_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    parent_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    current_stage: Mapped[str] = mapped_column(
        String(30), nullable=False, default=CaseStage.MATCHING.value
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    surrogate: Mapped["User | None"] = relationship(foreign_keys=[surrogate_id])
    parent: Mapped["User | None"] = relationship(foreign_keys=[parent_id])
    history: Mapped[list["CaseStageHistory"]] = relationship(
        back_populates="case",
        cascade="all, delete-orphan",
        order_by="CaseStageHistory.completed_at",
    )


class CaseStageHistory(Base):
    """
    Append-only log of stages a case has left.

    Each row records the stage that was completed, never the stage entered.
    """

    __tablename__ = "case_stage_history"
    __table_args__ = (
        Index("idx_case_history_case_completed", "case_id", "completed_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    case_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("cases.id", ondelete="CASCADE"), nullable=False
    )
    stage: Mapped[str] = mapped_column(String(30), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    completed_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    case: Mapped["SurrogacyCase"] = relationship(back_populates="history")
