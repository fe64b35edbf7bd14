"""Payment service - surrogate compensation ledger."""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import PaymentStatus, UserRole
from surrogacy_admin.db.models import Payment, User
from surrogacy_admin.schemas.finance import PaymentCreate, PaymentUpdate
from surrogacy_admin.utils.display_names import resolve_display_name

ZERO = Decimal("0.00")
NON_NULLABLE_FIELDS = ("type", "amount", "status")


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def _surrogate_name(db: Session, surrogate_id: UUID | None) -> str | None:
    if surrogate_id is None:
        return None
    surrogate = db.get(User, surrogate_id)
    if not surrogate or surrogate.role != UserRole.SURROGATE.value:
        raise ValueError("Surrogate not found")
    return resolve_display_name(surrogate)


def list_payments(db: Session, surrogate_id: UUID | None = None) -> list[Payment]:
    """Latest due date first; undated payments last."""
    query = db.query(Payment)
    if surrogate_id:
        query = query.filter(Payment.surrogate_id == surrogate_id)
    return query.order_by(
        Payment.due_date.is_(None),
        Payment.due_date.desc(),
        Payment.created_at.desc(),
    ).all()


def get_payment(db: Session, payment_id: UUID) -> Payment | None:
    return db.get(Payment, payment_id)


def create_payment(db: Session, data: PaymentCreate) -> Payment:
    values = {field: _plain(value) for field, value in data.model_dump().items()}
    payment = Payment(**values, surrogate_name=_surrogate_name(db, data.surrogate_id))
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return payment


def update_payment(db: Session, payment: Payment, data: PaymentUpdate) -> Payment:
    update_fields = data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS:
        if field in update_fields and update_fields[field] is None:
            del update_fields[field]
    for field, value in update_fields.items():
        setattr(payment, field, _plain(value))
    db.commit()
    db.refresh(payment)
    return payment


def delete_payment(db: Session, payment: Payment) -> None:
    db.delete(payment)
    db.commit()


def get_stats(db: Session, surrogate_id: UUID | None = None) -> dict[str, Decimal]:
    """Sum of amounts per reporting bucket (upcoming = Scheduled)."""
    query = db.query(Payment.status, func.coalesce(func.sum(Payment.amount), 0))
    if surrogate_id:
        query = query.filter(Payment.surrogate_id == surrogate_id)
    totals = {status: Decimal(str(total or 0)) for status, total in query.group_by(Payment.status)}

    def bucket(status: PaymentStatus) -> Decimal:
        return totals.get(status.value, ZERO).quantize(ZERO)

    return {
        "total_paid": bucket(PaymentStatus.PAID),
        "pending": bucket(PaymentStatus.PENDING),
        "upcoming": bucket(PaymentStatus.SCHEDULED),
        "overdue": bucket(PaymentStatus.OVERDUE),
    }
