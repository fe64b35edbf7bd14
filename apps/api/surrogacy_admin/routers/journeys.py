"""Journeys router - journey lifecycle, milestones and documents."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import JourneyStatus
from surrogacy_admin.db.models import Journey
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.document import DocumentCreate, DocumentRead
from surrogacy_admin.schemas.journey import (
    JourneyCancelRequest,
    JourneyCreate,
    JourneyListItem,
    JourneyListResponse,
    JourneyRead,
    JourneyTransitionRequest,
    JourneyUpdate,
    MilestoneRead,
    MilestoneUpsert,
)
from surrogacy_admin.schemas.stages import (
    NextStageResponse,
    StageCountsResponse,
    StageProgressRequest,
    StageTimelineResponse,
    TimelineEntryRead,
)
from surrogacy_admin.services import journey_service
from surrogacy_admin.services.stage_progression import StageConflictError
from surrogacy_admin.utils.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, page_count

router = APIRouter(
    prefix="/journeys",
    tags=["Journeys"],
    dependencies=[Depends(get_current_session)],
)


def _to_read(journey: Journey) -> JourneyRead:
    read = JourneyRead.model_validate(journey)
    read.parent_name, read.surrogate_name = journey_service.participant_names(journey)
    read.next_stage = journey_service.get_next_stage(journey)
    read.progress_percent = journey_service.get_progress_percent(journey)
    return read


def _get_or_404(db: Session, journey_id: UUID) -> Journey:
    journey = journey_service.get_journey(db, journey_id)
    if not journey:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journey not found")
    return journey


@router.get("", response_model=JourneyListResponse)
def list_journeys(
    db: Session = Depends(get_db),
    status_filter: JourneyStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
):
    journeys, total = journey_service.list_journeys(
        db, status=status_filter, page=page, per_page=per_page
    )
    items = []
    for journey in journeys:
        item = JourneyListItem.model_validate(journey)
        item.parent_name, item.surrogate_name = journey_service.participant_names(journey)
        item.progress_percent = journey_service.get_progress_percent(journey)
        items.append(item)
    return JourneyListResponse(
        items=items,
        total=total,
        page=page,
        per_page=per_page,
        pages=page_count(total, per_page),
    )


@router.get("/status-counts", response_model=StageCountsResponse)
def get_status_counts(db: Session = Depends(get_db)):
    counts = journey_service.count_by_status(db)
    return StageCountsResponse(counts=counts, total=sum(counts.values()))


@router.post(
    "",
    response_model=JourneyRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_journey(data: JourneyCreate, db: Session = Depends(get_db)):
    """Start a journey (usually from a match). Status starts at Medical Screening."""
    try:
        journey = journey_service.create_journey(db, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(_get_or_404(db, journey.id))


@router.get("/{journey_id}", response_model=JourneyRead)
def get_journey(journey_id: UUID, db: Session = Depends(get_db)):
    return _to_read(_get_or_404(db, journey_id))


@router.patch(
    "/{journey_id}",
    response_model=JourneyRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_journey(journey_id: UUID, data: JourneyUpdate, db: Session = Depends(get_db)):
    journey = _get_or_404(db, journey_id)
    journey_service.update_journey(db, journey, data)
    return _to_read(_get_or_404(db, journey_id))


@router.post(
    "/{journey_id}/progress",
    response_model=JourneyRead,
    dependencies=[Depends(require_csrf_header)],
)
def progress_journey(
    journey_id: UUID,
    data: StageProgressRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Advance the journey to its next stage."""
    journey = _get_or_404(db, journey_id)
    try:
        journey = journey_service.progress_journey(
            db, journey, actor_user_id=session.user_id, notes=data.notes
        )
    except StageConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(journey)


@router.post(
    "/{journey_id}/transition",
    response_model=JourneyRead,
    dependencies=[Depends(require_csrf_header)],
)
def transition_journey(
    journey_id: UUID,
    data: JourneyTransitionRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Move the journey to an explicit later stage. Completed stamps completed_at."""
    journey = _get_or_404(db, journey_id)
    try:
        journey = journey_service.transition_journey(
            db,
            journey,
            target=data.target_status.value,
            actor_user_id=session.user_id,
            notes=data.notes,
        )
    except StageConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(journey)


@router.post(
    "/{journey_id}/cancel",
    response_model=JourneyRead,
    dependencies=[Depends(require_csrf_header)],
)
def cancel_journey(
    journey_id: UUID,
    data: JourneyCancelRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    journey = _get_or_404(db, journey_id)
    try:
        journey = journey_service.cancel_journey(
            db, journey, actor_user_id=session.user_id, notes=data.notes
        )
    except StageConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_read(journey)


@router.get("/{journey_id}/next-stage", response_model=NextStageResponse)
def get_next_stage(journey_id: UUID, db: Session = Depends(get_db)):
    journey = _get_or_404(db, journey_id)
    return NextStageResponse(
        current_stage=journey.status,
        next_stage=journey_service.get_next_stage(journey),
    )


@router.get("/{journey_id}/timeline", response_model=StageTimelineResponse)
def get_journey_timeline(journey_id: UUID, db: Session = Depends(get_db)):
    journey = _get_or_404(db, journey_id)
    return StageTimelineResponse(
        current_stage=journey.status,
        progress_percent=journey_service.get_progress_percent(journey),
        stages=[
            TimelineEntryRead.model_validate(entry)
            for entry in journey_service.get_timeline(journey)
        ],
    )


# =============================================================================
# Milestones
# =============================================================================

@router.get("/{journey_id}/milestones", response_model=list[MilestoneRead])
def list_milestones(journey_id: UUID, db: Session = Depends(get_db)):
    _get_or_404(db, journey_id)
    return journey_service.list_milestones(db, journey_id)


@router.put(
    "/{journey_id}/milestones",
    response_model=MilestoneRead,
    dependencies=[Depends(require_csrf_header)],
)
def upsert_milestone(journey_id: UUID, data: MilestoneUpsert, db: Session = Depends(get_db)):
    """Update the milestone named by `id`, or create one when `id` is absent."""
    journey = _get_or_404(db, journey_id)
    try:
        return journey_service.upsert_milestone(db, journey, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# =============================================================================
# Documents
# =============================================================================

@router.get("/{journey_id}/documents", response_model=list[DocumentRead])
def list_documents(journey_id: UUID, db: Session = Depends(get_db)):
    _get_or_404(db, journey_id)
    return journey_service.list_documents(db, journey_id)


@router.post(
    "/{journey_id}/documents",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def add_document(journey_id: UUID, data: DocumentCreate, db: Session = Depends(get_db)):
    journey = _get_or_404(db, journey_id)
    return journey_service.add_document(db, journey, data)
