"""Financials router - agency ledger and surrogate payments."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_roles,
)
from surrogacy_admin.db.enums import UserRole
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.finance import (
    FinancialSummary,
    PaymentCreate,
    PaymentRead,
    PaymentStats,
    PaymentUpdate,
    TransactionCreate,
    TransactionRead,
    TransactionUpdate,
)
from surrogacy_admin.services import ledger_service, payment_service

router = APIRouter(
    prefix="/financials",
    tags=["Financials"],
    dependencies=[Depends(get_current_session)],
)

payments_router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
    dependencies=[Depends(get_current_session)],
)


# =============================================================================
# Agency ledger
# =============================================================================

def _get_transaction_or_404(db: Session, transaction_id: UUID):
    transaction = ledger_service.get_transaction(db, transaction_id)
    if not transaction:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return transaction


@router.get("/transactions", response_model=list[TransactionRead])
def list_transactions(journey_id: UUID | None = None, db: Session = Depends(get_db)):
    return ledger_service.list_transactions(db, journey_id)


@router.get("/summary", response_model=FinancialSummary)
def get_summary(db: Session = Depends(get_db)):
    return FinancialSummary(**ledger_service.get_summary(db))


@router.post(
    "/transactions",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_transaction(
    data: TransactionCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        return ledger_service.create_transaction(db, data, session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/transactions/{transaction_id}", response_model=TransactionRead)
def get_transaction(transaction_id: UUID, db: Session = Depends(get_db)):
    return _get_transaction_or_404(db, transaction_id)


@router.patch(
    "/transactions/{transaction_id}",
    response_model=TransactionRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_transaction(
    transaction_id: UUID, data: TransactionUpdate, db: Session = Depends(get_db)
):
    transaction = _get_transaction_or_404(db, transaction_id)
    try:
        return ledger_service.update_transaction(db, transaction, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete(
    "/transactions/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header), Depends(require_roles([UserRole.ADMIN]))],
)
def delete_transaction(transaction_id: UUID, db: Session = Depends(get_db)):
    """Delete a ledger entry (admin only)."""
    ledger_service.delete_transaction(db, _get_transaction_or_404(db, transaction_id))


# =============================================================================
# Surrogate payments
# =============================================================================

def _get_payment_or_404(db: Session, payment_id: UUID):
    payment = payment_service.get_payment(db, payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    return payment


@payments_router.get("", response_model=list[PaymentRead])
def list_payments(surrogate_id: UUID | None = None, db: Session = Depends(get_db)):
    return payment_service.list_payments(db, surrogate_id)


@payments_router.get("/stats", response_model=PaymentStats)
def get_payment_stats(surrogate_id: UUID | None = None, db: Session = Depends(get_db)):
    return PaymentStats(**payment_service.get_stats(db, surrogate_id))


@payments_router.post(
    "",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_payment(data: PaymentCreate, db: Session = Depends(get_db)):
    try:
        return payment_service.create_payment(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@payments_router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(payment_id: UUID, db: Session = Depends(get_db)):
    return _get_payment_or_404(db, payment_id)


@payments_router.patch(
    "/{payment_id}",
    response_model=PaymentRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_payment(payment_id: UUID, data: PaymentUpdate, db: Session = Depends(get_db)):
    return payment_service.update_payment(db, _get_payment_or_404(db, payment_id), data)


@payments_router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header), Depends(require_roles([UserRole.ADMIN]))],
)
def delete_payment(payment_id: UUID, db: Session = Depends(get_db)):
    payment_service.delete_payment(db, _get_payment_or_404(db, payment_id))
