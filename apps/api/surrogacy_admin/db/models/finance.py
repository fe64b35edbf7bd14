"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surrogacy_admin.db.base import Base, utcnow
from surrogacy_admin.db.enums import PaymentStatus, TransactionStatus

if TYPE_CHECKING:
    from surrogacy_admin.db.models import Journey, User


# =============================================================================
# Agency ledger
# =============================================================================

class AgencyTransaction(Base):
    """
    Agency revenue or expense entry.

    Only COMPLETED rows count toward realised totals; PENDING revenue is
    reported separately.
    """

    __tablename__ = "agency_transactions"
    __table_args__ = (
        Index("idx_transactions_date", "transaction_date"),
        Index("idx_transactions_journey", "journey_id"),
        Index("idx_transactions_type_status", "type", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TransactionStatus.PENDING.value
    )
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference: Mapped[str | None] = mapped_column(String(100), nullable=True)

    journey_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="SET NULL"), nullable=True
    )
    case_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_by_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    journey: Mapped["Journey | None"] = relationship()
    created_by: Mapped["User | None"] = relationship()


# =============================================================================
# Surrogate compensation
# =============================================================================

class Payment(Base):
    """Compensation line owed to (or collected for) a surrogate."""

    __tablename__ = "payments"
    __table_args__ = (
        Index("idx_payments_surrogate_due", "surrogate_id", "due_date"),
        Index("idx_payments_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    surrogate_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    surrogate_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    journey_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("journeys.id", ondelete="SET NULL"), nullable=True
    )

    type: Mapped[str] = mapped_column(String(30), nullable=False)
    category: Mapped[str | None] = mapped_column(String(20), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PaymentStatus.PENDING.value
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Invoice details
    invoice_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    invoice_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    surrogate: Mapped["User | None"] = relationship()
