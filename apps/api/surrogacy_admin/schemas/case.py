"""Pydantic schemas for surrogacy cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import CaseStage
from surrogacy_admin.schemas.stages import StageHistoryRead


class CaseCreate(BaseModel):
    """Request to open a case."""
    surrogate_id: UUID | None = None
    parent_id: UUID | None = None
    # Used only when the participant id is not given
    surrogate_name: str | None = Field(None, max_length=255)
    parent_name: str | None = Field(None, max_length=255)
    notes: str | None = Field(None, max_length=5000)


class CaseNotesUpdate(BaseModel):
    notes: str | None = Field(None, max_length=5000)


class CaseTransitionRequest(BaseModel):
    """Move a case to an explicit later stage."""
    target_stage: CaseStage
    notes: str | None = Field(None, max_length=5000)


class CaseRead(BaseModel):
    """Full case response."""
    id: UUID
    surrogate_id: UUID | None
    parent_id: UUID | None
    surrogate_name: str
    parent_name: str
    current_stage: str
    next_stage: str | None = None
    progress_percent: float | None = None
    notes: str | None
    history: list[StageHistoryRead] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CaseListItem(BaseModel):
    """Compact case for list views."""
    id: UUID
    surrogate_name: str
    parent_name: str
    current_stage: str
    progress_percent: float | None = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class CaseListResponse(BaseModel):
    """Paginated case list."""
    items: list[CaseListItem]
    total: int
    page: int
    per_page: int
    pages: int
