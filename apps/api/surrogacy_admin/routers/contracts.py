"""Contracts router - list, create and status changes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import ContractStatus
from surrogacy_admin.schemas.contract import ContractCreate, ContractRead, ContractStatusUpdate
from surrogacy_admin.services import contract_service

router = APIRouter(
    prefix="/contracts",
    tags=["Contracts"],
    dependencies=[Depends(get_current_session)],
)


def _get_or_404(db: Session, contract_id: UUID):
    contract = contract_service.get_contract(db, contract_id)
    if not contract:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contract not found")
    return contract


@router.get("", response_model=list[ContractRead])
def list_contracts(
    db: Session = Depends(get_db),
    status_filter: ContractStatus | None = Query(None, alias="status"),
):
    """Newest first. Missing party names read as "Unknown", missing value as 0."""
    return contract_service.list_contracts(db, status_filter=status_filter)


@router.post(
    "",
    response_model=ContractRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_contract(data: ContractCreate, db: Session = Depends(get_db)):
    try:
        return contract_service.create_contract(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{contract_id}", response_model=ContractRead)
def get_contract(contract_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, contract_id)


@router.patch(
    "/{contract_id}/status",
    response_model=ContractRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_contract_status(
    contract_id: UUID, data: ContractStatusUpdate, db: Session = Depends(get_db)
):
    contract = _get_or_404(db, contract_id)
    return contract_service.update_status(db, contract, data.status)
