"""Pydantic schemas for tasks."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    """Request to create a task."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    assignee_id: UUID | None = None
    due_date: date | None = None


class TaskUpdate(BaseModel):
    """Request to update a task (partial)."""
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    assignee_id: UUID | None = None
    due_date: date | None = None


class TaskRead(BaseModel):
    """Full task response."""
    id: UUID
    assignee_id: UUID | None
    assignee_name: str | None = None
    created_by_user_id: UUID | None

    title: str
    description: str | None
    due_date: date | None
    is_completed: bool
    completed_at: datetime | None
    is_overdue: bool = False

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TaskListResponse(BaseModel):
    """Paginated task list."""
    items: list[TaskRead]
    total: int
    page: int
    per_page: int
    pages: int
