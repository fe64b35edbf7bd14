"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow

if TYPE_CHECKING:
    from surrogacy_admin.db.models import Journey


class BabyWatchUpdate(Base):
    """
    Pregnancy progress update shared with intended parents.

    image_path is the storage-relative key; image_url is the public URL
    derived from it at upload time.
    """

    __tablename__ = "baby_watch_updates"
    __table_args__ = (
        Index("idx_baby_watch_journey_date", "journey_id", "update_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    journey_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="CASCADE"), nullable=False
    )
    update_date: Mapped[date] = mapped_column(Date, nullable=False)
    gestational_age_weeks: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[str | None] = mapped_column(String(50), nullable=True)
    heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    medical_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    shared_with_parents: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    image_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    journey: Mapped["Journey"] = relationship()
