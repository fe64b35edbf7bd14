"""Dashboard router - API endpoints for dashboard widgets."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db
from surrogacy_admin.schemas.appointment import AppointmentRead
from surrogacy_admin.schemas.task import TaskRead
from surrogacy_admin.services import dashboard_service, task_service

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_session)],
)


# =============================================================================
# Schemas
# =============================================================================


class ParticipantCounts(BaseModel):
    total: int
    profile_completed: int


class DashboardSummary(BaseModel):
    """Counters for the home page cards."""

    participants: dict[str, ParticipantCounts]
    matches_by_status: dict[str, int]
    cases_by_stage: dict[str, int]
    journeys_by_status: dict[str, int]
    open_tasks: int
    overdue_tasks: int
    pending_screenings: int
    new_inquiries: int


class UpcomingResponse(BaseModel):
    tasks: list[TaskRead]
    appointments: list[AppointmentRead]


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/summary", response_model=DashboardSummary)
def get_summary(db: Session = Depends(get_db)):
    return dashboard_service.get_summary(db)


@router.get("/upcoming", response_model=UpcomingResponse)
def get_upcoming(
    days: int = Query(7, ge=1, le=14, description="Number of days to look ahead"),
    include_overdue: bool = Query(True, description="Include overdue tasks"),
    db: Session = Depends(get_db),
) -> UpcomingResponse:
    """Open tasks and appointments in the coming days."""
    tasks, appointments = dashboard_service.get_upcoming_items(
        db, days=days, include_overdue=include_overdue
    )
    return UpcomingResponse(
        tasks=[task_service.to_task_read(t) for t in tasks],
        appointments=[AppointmentRead.model_validate(a) for a in appointments],
    )
