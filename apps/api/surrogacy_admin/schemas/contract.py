"""Pydantic schemas for contracts."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from surrogacy_admin.db.enums import ContractStatus, ContractType

UNKNOWN_PARTY = "Unknown"


class ContractCreate(BaseModel):
    """
    Request to create a contract.

    Party names are resolved from parent_id / surrogate_id when given; the
    explicit names are used only for parties without an account.
    """
    title: str = Field(..., min_length=1, max_length=255)
    contract_type: ContractType | None = None
    parent_id: UUID | None = None
    surrogate_id: UUID | None = None
    journey_id: UUID | None = None
    parent_name: str | None = Field(None, max_length=255)
    surrogate_name: str | None = Field(None, max_length=255)
    status: ContractStatus = ContractStatus.DRAFT
    value: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None
    document_url: str | None = None
    notes: str | None = None


class ContractStatusUpdate(BaseModel):
    status: ContractStatus


class ContractRead(BaseModel):
    id: UUID
    title: str | None
    contract_type: str | None
    parent_id: UUID | None
    surrogate_id: UUID | None
    journey_id: UUID | None
    parent_name: str
    surrogate_name: str
    status: str
    value: Decimal
    start_date: date | None
    end_date: date | None
    document_url: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("parent_name", "surrogate_name", mode="before")
    @classmethod
    def default_party_name(cls, v):
        return v or UNKNOWN_PARTY

    @field_validator("value", mode="before")
    @classmethod
    def default_value(cls, v):
        return Decimal("0") if v is None else v
