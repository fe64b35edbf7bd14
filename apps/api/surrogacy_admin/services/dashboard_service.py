"""Dashboard service - summary counts and upcoming items for the home page."""

from datetime import date, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import (
    AppointmentStatus,
    PARTICIPANT_ROLES,
    ScreeningStatus,
)
from surrogacy_admin.db.models import Appointment, MedicalScreening, Task, User
from surrogacy_admin.services import (
    inquiry_service,
    journey_service,
    match_service,
    milestone_service,
    task_service,
)

PENDING_SCREENING_STATUSES = (
    ScreeningStatus.PENDING.value,
    ScreeningStatus.IN_REVIEW.value,
)


def _participant_counts(db: Session) -> dict[str, dict[str, int]]:
    """{role: {"total": n, "profile_completed": m}} for each participant role."""
    rows = (
        db.query(User.role, User.profile_completed, func.count(User.id))
        .filter(User.role.in_([r.value for r in PARTICIPANT_ROLES]))
        .group_by(User.role, User.profile_completed)
        .all()
    )
    counts = {r.value: {"total": 0, "profile_completed": 0} for r in PARTICIPANT_ROLES}
    for role, completed, count in rows:
        counts[role]["total"] += count
        if completed:
            counts[role]["profile_completed"] += count
    return counts


def get_summary(db: Session, today: date | None = None) -> dict:
    """All dashboard counters in one payload."""
    today = today or date.today()
    pending_screenings = (
        db.query(MedicalScreening)
        .filter(MedicalScreening.status.in_(PENDING_SCREENING_STATUSES))
        .count()
    )
    return {
        "participants": _participant_counts(db),
        "matches_by_status": match_service.get_match_stats(db),
        "cases_by_stage": milestone_service.count_by_stage(db),
        "journeys_by_status": journey_service.count_by_status(db),
        "open_tasks": task_service.count_pending_tasks(db),
        "overdue_tasks": task_service.count_overdue_tasks(db, today=today),
        "pending_screenings": pending_screenings,
        "new_inquiries": inquiry_service.count_new_inquiries(db),
    }


def get_upcoming_items(
    db: Session,
    days: int,
    include_overdue: bool,
    today: date | None = None,
) -> tuple[list[Task], list[Appointment]]:
    """Open tasks and appointments due in the next `days` days."""
    today = today or date.today()
    end_date = today + timedelta(days=days)

    task_query = db.query(Task).filter(
        Task.is_completed.is_(False),
        Task.due_date.is_not(None),
        Task.due_date <= end_date,
    )
    if not include_overdue:
        task_query = task_query.filter(Task.due_date >= today)
    tasks = task_query.order_by(Task.due_date).limit(50).all()

    appointments = (
        db.query(Appointment)
        .filter(
            Appointment.appointment_date >= today,
            Appointment.appointment_date <= end_date,
            Appointment.status != AppointmentStatus.CANCELLED.value,
        )
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
        .limit(50)
        .all()
    )
    return tasks, appointments
