"""Task service - business logic for task management."""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.models import Task, User
from surrogacy_admin.schemas.task import TaskCreate, TaskRead, TaskUpdate
from surrogacy_admin.utils.display_names import resolve_display_name


def is_overdue(task: Task, today: date | None = None) -> bool:
    """
    True when an open task is past its due date.

    Completed tasks and tasks without a due date are never overdue.
    """
    if task.is_completed or task.due_date is None:
        return False
    today = today or date.today()
    return task.due_date < today


def _assignee_name(db: Session, assignee_id: UUID | None) -> str | None:
    if assignee_id is None:
        return None
    assignee = db.get(User, assignee_id)
    if not assignee:
        raise ValueError("Assignee not found")
    return resolve_display_name(assignee)


def create_task(
    db: Session,
    user_id: UUID,
    data: TaskCreate,
) -> Task:
    """Create a new task."""
    task = Task(
        created_by_user_id=user_id,
        assignee_id=data.assignee_id,
        assignee_name=_assignee_name(db, data.assignee_id),
        title=data.title,
        description=data.description,
        due_date=data.due_date,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def update_task(db: Session, task: Task, data: TaskUpdate) -> Task:
    """Update task fields (partial)."""
    update_fields = data.model_dump(exclude_unset=True)
    if update_fields.get("title") is None:
        update_fields.pop("title", None)
    if "assignee_id" in update_fields:
        task.assignee_name = _assignee_name(db, update_fields["assignee_id"])
    for field, value in update_fields.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


def set_completed(db: Session, task: Task, completed: bool) -> Task:
    """Mark task completed (stamps completed_at) or reopen it (clears it)."""
    if task.is_completed == completed:
        return task
    task.is_completed = completed
    task.completed_at = utcnow() if completed else None
    db.commit()
    db.refresh(task)
    return task


def toggle_task(db: Session, task: Task) -> Task:
    return set_completed(db, task, not task.is_completed)


def get_task(db: Session, task_id: UUID) -> Task | None:
    """Get task by ID."""
    return db.query(Task).filter(Task.id == task_id).first()


def delete_task(db: Session, task: Task) -> None:
    """Delete a task."""
    db.delete(task)
    db.commit()


def list_tasks(
    db: Session,
    *,
    assignee_id: UUID | None = None,
    is_completed: bool | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Task], int]:
    """List tasks ordered by due date (undated last)."""
    query = db.query(Task)
    if assignee_id:
        query = query.filter(Task.assignee_id == assignee_id)
    if is_completed is not None:
        query = query.filter(Task.is_completed.is_(is_completed))

    total = query.count()
    tasks = (
        query.order_by(
            Task.due_date.is_(None),
            Task.due_date.asc(),
            Task.created_at.asc(),
        )
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return tasks, total


def to_task_read(task: Task, today: date | None = None) -> TaskRead:
    read = TaskRead.model_validate(task)
    read.is_overdue = is_overdue(task, today)
    return read


def count_pending_tasks(db: Session) -> int:
    """Count incomplete tasks for dashboard metrics."""
    return db.query(Task).filter(Task.is_completed.is_(False)).count()


def count_overdue_tasks(db: Session, today: date | None = None) -> int:
    """Count overdue tasks for dashboard metrics."""
    today = today or date.today()
    return db.query(Task).filter(
        Task.is_completed.is_(False),
        Task.due_date.is_not(None),
        Task.due_date < today,
    ).count()
