"""Pydantic schemas shared by case and journey stage endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class StageHistoryRead(BaseModel):
    """A stage that was left, with who left it and when."""
    stage: str
    completed_at: datetime
    completed_by_user_id: UUID | None
    notes: str | None

    model_config = {"from_attributes": True}


class StageProgressRequest(BaseModel):
    """Advance to the next stage."""
    notes: str | None = Field(None, max_length=5000)


class TimelineEntryRead(BaseModel):
    stage: str
    status: Literal["completed", "current", "upcoming", "cancelled"]
    completed_at: datetime | None = None

    model_config = {"from_attributes": True}


class StageTimelineResponse(BaseModel):
    """Every stage of the track with its status for one record."""
    current_stage: str
    progress_percent: float | None
    stages: list[TimelineEntryRead]


class NextStageResponse(BaseModel):
    current_stage: str
    next_stage: str | None


class StageCountsResponse(BaseModel):
    """Record counts per stage (filter tabs)."""
    counts: dict[str, int]
    total: int
