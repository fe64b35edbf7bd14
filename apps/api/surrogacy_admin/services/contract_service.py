"""Contract service - agreements between intended parents and surrogates."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import ContractStatus, UserRole
from surrogacy_admin.db.models import Contract, Journey, User
from surrogacy_admin.schemas.contract import ContractCreate
from surrogacy_admin.utils.display_names import resolve_display_name

logger = logging.getLogger(__name__)


def _party_name(db: Session, user_id: UUID | None, role: UserRole, fallback: str | None) -> str | None:
    if user_id is None:
        return fallback
    user = db.get(User, user_id)
    if not user or user.role != role.value:
        raise ValueError(f"{role.value} not found")
    return resolve_display_name(user)


def list_contracts(
    db: Session, status_filter: ContractStatus | None = None
) -> list[Contract]:
    """Newest first."""
    query = db.query(Contract)
    if status_filter:
        query = query.filter(Contract.status == status_filter.value)
    return query.order_by(Contract.created_at.desc()).all()


def get_contract(db: Session, contract_id: UUID) -> Contract | None:
    return db.get(Contract, contract_id)


def create_contract(db: Session, data: ContractCreate) -> Contract:
    """
    Create a contract in the requested status (draft by default).

    Raises:
        ValueError: Linked participant or journey not found
    """
    if data.journey_id and not db.get(Journey, data.journey_id):
        raise ValueError("Journey not found")

    contract = Contract(
        title=data.title,
        contract_type=data.contract_type.value if data.contract_type else None,
        parent_id=data.parent_id,
        surrogate_id=data.surrogate_id,
        journey_id=data.journey_id,
        parent_name=_party_name(db, data.parent_id, UserRole.INTENDED_PARENT, data.parent_name),
        surrogate_name=_party_name(db, data.surrogate_id, UserRole.SURROGATE, data.surrogate_name),
        status=data.status.value,
        value=data.value,
        start_date=data.start_date,
        end_date=data.end_date,
        document_url=data.document_url,
        notes=data.notes,
    )
    db.add(contract)
    db.commit()
    db.refresh(contract)
    logger.info("Contract %s created with status %s", contract.id, contract.status)
    return contract


def update_status(db: Session, contract: Contract, status: ContractStatus) -> Contract:
    contract.status = status.value
    db.commit()
    db.refresh(contract)
    return contract
