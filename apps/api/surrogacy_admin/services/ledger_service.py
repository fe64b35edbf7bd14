"""Ledger service - agency revenue and expense entries."""

import logging
from decimal import Decimal
from enum import Enum
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import TransactionStatus, TransactionType
from surrogacy_admin.db.models import AgencyTransaction, Journey
from surrogacy_admin.schemas.finance import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
NON_NULLABLE_FIELDS = ("type", "category", "amount", "transaction_date", "status")


def _plain(value):
    return value.value if isinstance(value, Enum) else value


def _case_number(db: Session, journey_id: UUID | None) -> str | None:
    if journey_id is None:
        return None
    journey = db.get(Journey, journey_id)
    if not journey:
        raise ValueError("Journey not found")
    return journey.case_number


def list_transactions(db: Session, journey_id: UUID | None = None) -> list[AgencyTransaction]:
    """Newest transaction date first."""
    query = db.query(AgencyTransaction)
    if journey_id:
        query = query.filter(AgencyTransaction.journey_id == journey_id)
    return query.order_by(
        AgencyTransaction.transaction_date.desc(),
        AgencyTransaction.created_at.desc(),
    ).all()


def get_transaction(db: Session, transaction_id: UUID) -> AgencyTransaction | None:
    return db.get(AgencyTransaction, transaction_id)


def create_transaction(
    db: Session, data: TransactionCreate, actor_user_id: UUID | None
) -> AgencyTransaction:
    values = {field: _plain(value) for field, value in data.model_dump().items()}
    transaction = AgencyTransaction(
        **values,
        case_number=_case_number(db, data.journey_id),
        created_by_user_id=actor_user_id,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("Ledger entry %s created (%s)", transaction.id, transaction.type)
    return transaction


def update_transaction(
    db: Session, transaction: AgencyTransaction, data: TransactionUpdate
) -> AgencyTransaction:
    update_fields = data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS:
        if field in update_fields and update_fields[field] is None:
            del update_fields[field]
    if "journey_id" in update_fields:
        transaction.case_number = _case_number(db, update_fields["journey_id"])
    for field, value in update_fields.items():
        setattr(transaction, field, _plain(value))
    db.commit()
    db.refresh(transaction)
    return transaction


def delete_transaction(db: Session, transaction: AgencyTransaction) -> None:
    transaction_id = transaction.id
    db.delete(transaction)
    db.commit()
    logger.info("Ledger entry %s deleted", transaction_id)


def _sum(db: Session, *filters) -> Decimal:
    total = db.query(func.coalesce(func.sum(AgencyTransaction.amount), 0)).filter(*filters).scalar()
    return Decimal(str(total or 0)).quantize(ZERO)


def get_summary(db: Session) -> dict[str, Decimal]:
    """
    Totals for the financials page.

    Revenue and expenses count Completed rows only; pending_revenue is
    Revenue still Pending.
    """
    completed = AgencyTransaction.status == TransactionStatus.COMPLETED.value
    total_revenue = _sum(db, completed, AgencyTransaction.type == TransactionType.REVENUE.value)
    total_expenses = _sum(db, completed, AgencyTransaction.type == TransactionType.EXPENSE.value)
    pending_revenue = _sum(
        db,
        AgencyTransaction.status == TransactionStatus.PENDING.value,
        AgencyTransaction.type == TransactionType.REVENUE.value,
    )
    return {
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "net_income": total_revenue - total_expenses,
        "pending_revenue": pending_revenue,
    }
