"""Pydantic schemas for journeys and their milestones."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import JourneyStatus, MilestoneStatus
from surrogacy_admin.schemas.stages import StageHistoryRead


class JourneyCreate(BaseModel):
    """
    Request to start a journey.

    When match_id is given, participant ids are copied from the match and
    explicit ids are ignored.
    """
    match_id: UUID | None = None
    parent_id: UUID | None = None
    surrogate_id: UUID | None = None
    case_manager_id: UUID | None = None
    case_number: str | None = Field(None, min_length=1, max_length=20)
    estimated_delivery_date: date | None = None


class JourneyUpdate(BaseModel):
    """Partial update of journey details (not status)."""
    case_manager_id: UUID | None = None
    estimated_delivery_date: date | None = None
    medical_records: list[Any] | None = None
    legal_agreements: list[Any] | None = None
    journey_notes: list[Any] | None = None


class JourneyTransitionRequest(BaseModel):
    target_status: JourneyStatus
    notes: str | None = Field(None, max_length=5000)


class JourneyCancelRequest(BaseModel):
    notes: str | None = Field(None, max_length=5000)


class JourneyRead(BaseModel):
    """Full journey response."""
    id: UUID
    case_number: str
    match_id: UUID | None
    parent_id: UUID | None
    surrogate_id: UUID | None
    case_manager_id: UUID | None
    parent_name: str | None = None
    surrogate_name: str | None = None
    status: str
    next_stage: str | None = None
    progress_percent: float | None = None
    estimated_delivery_date: date | None
    medical_records: list[Any] | None
    legal_agreements: list[Any] | None
    journey_notes: list[Any] | None
    history: list[StageHistoryRead] = []
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None
    cancelled_at: datetime | None

    model_config = {"from_attributes": True}


class JourneyListItem(BaseModel):
    id: UUID
    case_number: str
    parent_name: str | None = None
    surrogate_name: str | None = None
    status: str
    progress_percent: float | None = None
    estimated_delivery_date: date | None
    created_at: datetime

    model_config = {"from_attributes": True}


class JourneyListResponse(BaseModel):
    items: list[JourneyListItem]
    total: int
    page: int
    per_page: int
    pages: int


# =============================================================================
# Milestones
# =============================================================================

class MilestoneUpsert(BaseModel):
    """Create a milestone, or update it when id is given."""
    id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: str | None = Field(None, max_length=50)
    scheduled_date: date | None = None
    completed_date: date | None = None
    status: MilestoneStatus = MilestoneStatus.PENDING
    notes: str | None = None
    assigned_to: list[str] = []


class MilestoneRead(BaseModel):
    id: UUID
    journey_id: UUID
    title: str
    description: str | None
    type: str | None
    scheduled_date: date | None
    completed_date: date | None
    status: str
    notes: str | None
    assigned_to: list[str] | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
