"""Cases router - milestone tracking for surrogacy cases."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import CaseStage
from surrogacy_admin.db.models import SurrogacyCase
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.case import (
    CaseCreate,
    CaseListItem,
    CaseListResponse,
    CaseNotesUpdate,
    CaseRead,
    CaseTransitionRequest,
)
from surrogacy_admin.schemas.stages import (
    NextStageResponse,
    StageCountsResponse,
    StageProgressRequest,
    StageTimelineResponse,
    TimelineEntryRead,
)
from surrogacy_admin.services import milestone_service
from surrogacy_admin.services.stage_progression import StageConflictError
from surrogacy_admin.utils.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, page_count

router = APIRouter(
    prefix="/cases",
    tags=["Cases"],
    dependencies=[Depends(get_current_session)],
)


def _to_read(case: SurrogacyCase) -> CaseRead:
    read = CaseRead.model_validate(case)
    read.next_stage = milestone_service.get_next_stage(case)
    read.progress_percent = milestone_service.get_progress_percent(case)
    return read


def _get_or_404(db: Session, case_id: UUID) -> SurrogacyCase:
    case = milestone_service.get_case(db, case_id)
    if not case:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
    return case


@router.get("", response_model=CaseListResponse)
def list_cases(
    db: Session = Depends(get_db),
    stage: CaseStage | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
):
    """List cases, optionally filtered by stage. Newest update first."""
    cases, total = milestone_service.list_cases(db, stage=stage, page=page, per_page=per_page)
    items = []
    for case in cases:
        item = CaseListItem.model_validate(case)
        item.progress_percent = milestone_service.get_progress_percent(case)
        items.append(item)
    return CaseListResponse(
        items=items,
        total=total,
        page=page,
        per_page=per_page,
        pages=page_count(total, per_page),
    )


@router.get("/stage-counts", response_model=StageCountsResponse)
def get_stage_counts(db: Session = Depends(get_db)):
    counts = milestone_service.count_by_stage(db)
    return StageCountsResponse(counts=counts, total=sum(counts.values()))


@router.post(
    "",
    response_model=CaseRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_case(data: CaseCreate, db: Session = Depends(get_db)):
    """Open a case at the Matching stage."""
    try:
        case = milestone_service.create_case(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(case)


@router.get("/{case_id}", response_model=CaseRead)
def get_case(case_id: UUID, db: Session = Depends(get_db)):
    return _to_read(_get_or_404(db, case_id))


@router.patch(
    "/{case_id}",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_case_notes(case_id: UUID, data: CaseNotesUpdate, db: Session = Depends(get_db)):
    case = _get_or_404(db, case_id)
    case = milestone_service.update_notes(db, case, data.notes)
    return _to_read(case)


@router.post(
    "/{case_id}/progress",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def progress_case(
    case_id: UUID,
    data: StageProgressRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Advance the case to the next stage.

    Appends one history entry for the stage that was completed.
    Returns 400 when the case is already at its final stage and 409 when
    another request moved it first.
    """
    case = _get_or_404(db, case_id)
    try:
        case = milestone_service.progress_case(
            db, case, actor_user_id=session.user_id, notes=data.notes
        )
    except StageConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(case)


@router.post(
    "/{case_id}/transition",
    response_model=CaseRead,
    dependencies=[Depends(require_csrf_header)],
)
def transition_case(
    case_id: UUID,
    data: CaseTransitionRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Move the case to an explicit later stage."""
    case = _get_or_404(db, case_id)
    try:
        case = milestone_service.transition_case(
            db,
            case,
            target=data.target_stage.value,
            actor_user_id=session.user_id,
            notes=data.notes,
        )
    except StageConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(case)


@router.get("/{case_id}/next-stage", response_model=NextStageResponse)
def get_next_stage(case_id: UUID, db: Session = Depends(get_db)):
    case = _get_or_404(db, case_id)
    return NextStageResponse(
        current_stage=case.current_stage,
        next_stage=milestone_service.get_next_stage(case),
    )


@router.get("/{case_id}/timeline", response_model=StageTimelineResponse)
def get_case_timeline(case_id: UUID, db: Session = Depends(get_db)):
    case = _get_or_404(db, case_id)
    return StageTimelineResponse(
        current_stage=case.current_stage,
        progress_percent=milestone_service.get_progress_percent(case),
        stages=[
            TimelineEntryRead.model_validate(entry)
            for entry in milestone_service.get_timeline(case)
        ],
    )
