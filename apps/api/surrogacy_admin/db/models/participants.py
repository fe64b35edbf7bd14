"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.types import JSONType


class User(Base):
    """
    Any account known to the agency: intended parents, surrogates and staff.

    Participant records are loosely typed. Intake forms land in the JSON
    blobs (form_data, form2_data, parent1, ...) whose shape varies by role and
    by the form version the participant filled in. Read display names through
    utils.display_names.resolve_display_name, never from a single column.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_role_status", "role", "status"),
        Index("idx_users_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    role: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    source: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Intake form responses (schemaless)
    form_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    form2: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)  # GC specific
    form2_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    parent1: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)  # IP specific
    parent2: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)  # IP specific
    surrogate_related: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    about: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    attributes: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    profile_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    form2_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    medical_clearance_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Staff session control
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    token_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )
