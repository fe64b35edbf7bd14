"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Index, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import MatchStatus
from surrogacy_admin.db.types import JSONType

if TYPE_CHECKING:
    from surrogacy_admin.db.models import User


class Match(Base):
    """
    Pairing of an intended parent with a surrogate.

    status is a free vocabulary (no transition graph). Each side records its
    own accept/decline flags independently of status.
    """

    __tablename__ = "matches"
    __table_args__ = (
        Index("ix_matches_parent_id", "parent_id"),
        Index("ix_matches_surrogate_id", "surrogate_id"),
        Index("idx_matches_status_created", "status", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    parent_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    surrogate_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MatchStatus.PROPOSED.value
    )
    match_score: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2),  # 0.00 to 100.00
        nullable=True,
    )
    match_criteria: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    agency_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    matched_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Per-side responses
    parent_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    parent_declined: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    surrogate_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    surrogate_declined: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    # Relationships
    parent: Mapped["User"] = relationship(foreign_keys=[parent_id])
    surrogate: Mapped["User | None"] = relationship(foreign_keys=[surrogate_id])
