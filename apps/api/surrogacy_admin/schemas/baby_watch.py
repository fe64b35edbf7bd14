"""Pydantic schemas for baby watch updates."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel


class BabyWatchRead(BaseModel):
    id: UUID
    journey_id: UUID
    update_date: date
    gestational_age_weeks: int | None
    weight: str | None
    heart_rate: int | None
    medical_notes: str | None
    shared_with_parents: bool
    image_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
