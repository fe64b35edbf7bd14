"""Tasks router - API endpoints for task management."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.task import TaskCreate, TaskListResponse, TaskRead, TaskUpdate
from surrogacy_admin.services import task_service
from surrogacy_admin.utils.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, page_count

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    dependencies=[Depends(get_current_session)],
)


def _get_or_404(db: Session, task_id: UUID):
    task = task_service.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=TaskListResponse)
def list_tasks(
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    assignee_id: UUID | None = None,
    is_completed: bool | None = None,
):
    """List tasks ordered by due date."""
    tasks, total = task_service.list_tasks(
        db,
        assignee_id=assignee_id,
        is_completed=is_completed,
        page=page,
        per_page=per_page,
    )
    return TaskListResponse(
        items=[task_service.to_task_read(t) for t in tasks],
        total=total,
        page=page,
        per_page=per_page,
        pages=page_count(total, per_page),
    )


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_task(
    data: TaskCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    try:
        task = task_service.create_task(db, session.user_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return task_service.to_task_read(task)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: UUID, db: Session = Depends(get_db)):
    return task_service.to_task_read(_get_or_404(db, task_id))


@router.patch(
    "/{task_id}", response_model=TaskRead, dependencies=[Depends(require_csrf_header)]
)
def update_task(task_id: UUID, data: TaskUpdate, db: Session = Depends(get_db)):
    task = _get_or_404(db, task_id)
    try:
        task = task_service.update_task(db, task, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return task_service.to_task_read(task)


@router.post(
    "/{task_id}/toggle",
    response_model=TaskRead,
    dependencies=[Depends(require_csrf_header)],
)
def toggle_task(task_id: UUID, db: Session = Depends(get_db)):
    """Flip completion. Completing stamps completed_at; reopening clears it."""
    task = task_service.toggle_task(db, _get_or_404(db, task_id))
    return task_service.to_task_read(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_task(task_id: UUID, db: Session = Depends(get_db)):
    task_service.delete_task(db, _get_or_404(db, task_id))
