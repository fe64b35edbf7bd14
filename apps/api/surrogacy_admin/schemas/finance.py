"""Pydantic schemas for the agency ledger and surrogate payments."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import (
    PaymentCategory,
    PaymentStatus,
    PaymentType,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)


# =============================================================================
# Agency transactions
# =============================================================================

class TransactionCreate(BaseModel):
    type: TransactionType
    category: TransactionCategory = TransactionCategory.OTHER
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    transaction_date: date
    description: str | None = None
    status: TransactionStatus = TransactionStatus.PENDING
    payment_method: str | None = Field(None, max_length=50)
    reference: str | None = Field(None, max_length=100)
    journey_id: UUID | None = None


class TransactionUpdate(BaseModel):
    """Partial update."""
    type: TransactionType | None = None
    category: TransactionCategory | None = None
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    transaction_date: date | None = None
    description: str | None = None
    status: TransactionStatus | None = None
    payment_method: str | None = Field(None, max_length=50)
    reference: str | None = Field(None, max_length=100)
    journey_id: UUID | None = None


class TransactionRead(BaseModel):
    id: UUID
    type: str
    category: str
    amount: Decimal
    transaction_date: date
    description: str | None
    status: str
    payment_method: str | None
    reference: str | None
    journey_id: UUID | None
    case_number: str | None
    created_by_user_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FinancialSummary(BaseModel):
    """Realised totals over Completed rows plus revenue still pending."""
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal
    pending_revenue: Decimal


# =============================================================================
# Surrogate payments
# =============================================================================

class PaymentCreate(BaseModel):
    surrogate_id: UUID | None = None
    journey_id: UUID | None = None
    type: PaymentType
    category: PaymentCategory | None = None
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    status: PaymentStatus = PaymentStatus.PENDING
    due_date: date | None = None
    paid_date: date | None = None
    description: str | None = None
    invoice_number: str | None = Field(None, max_length=50)
    invoice_url: str | None = None


class PaymentUpdate(BaseModel):
    """Partial update."""
    type: PaymentType | None = None
    category: PaymentCategory | None = None
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    status: PaymentStatus | None = None
    due_date: date | None = None
    paid_date: date | None = None
    description: str | None = None
    invoice_number: str | None = Field(None, max_length=50)
    invoice_url: str | None = None


class PaymentRead(BaseModel):
    id: UUID
    surrogate_id: UUID | None
    surrogate_name: str | None
    journey_id: UUID | None
    type: str
    category: str | None
    amount: Decimal
    status: str
    due_date: date | None
    paid_date: date | None
    description: str | None
    invoice_number: str | None
    invoice_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaymentStats(BaseModel):
    total_paid: Decimal
    pending: Decimal
    upcoming: Decimal
    overdue: Decimal
