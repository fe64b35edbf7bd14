"""Matches router - API endpoints for matching surrogates with intended parents."""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.enums import MatchStatus
from surrogacy_admin.db.models import Match
from surrogacy_admin.services import match_service
from surrogacy_admin.utils.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, page_count

router = APIRouter(
    prefix="/matches",
    tags=["Matches"],
    dependencies=[Depends(get_current_session)],
)


# =============================================================================
# Schemas
# =============================================================================


class MatchCreate(BaseModel):
    """Request to create a match."""

    parent_id: UUID
    surrogate_id: UUID | None = None
    status: MatchStatus | None = None
    matched_at: datetime | None = None
    match_score: float | None = Field(None, ge=0, le=100)
    match_criteria: dict[str, Any] | None = None
    agency_notes: str | None = None


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class MatchResponsesUpdate(BaseModel):
    """Per-side responses. Omitted flags are left unchanged."""

    parent_accepted: bool | None = None
    parent_declined: bool | None = None
    surrogate_accepted: bool | None = None
    surrogate_declined: bool | None = None


class MatchDetailsUpdate(BaseModel):
    match_score: float | None = Field(None, ge=0, le=100)
    agency_notes: str | None = None
    match_criteria: dict[str, Any] | None = None


class ParticipantPreviewRead(BaseModel):
    id: UUID
    name: str
    email: str
    role: str
    status: str | None
    profile_completed: bool
    form2_completed: bool
    location: str
    readiness_label: str
    readiness_color: str

    model_config = {"from_attributes": True}


class MatchRead(BaseModel):
    """Match response."""

    id: UUID
    parent_id: UUID
    surrogate_id: UUID | None
    status: str
    match_score: float | None
    match_criteria: dict[str, Any] | None
    agency_notes: str | None
    matched_at: datetime | None
    parent_accepted: bool
    parent_declined: bool
    surrogate_accepted: bool
    surrogate_declined: bool
    created_at: datetime
    updated_at: datetime
    # Denormalized for convenience
    parent_name: str | None = None
    surrogate_name: str | None = None
    parent_preview: ParticipantPreviewRead | None = None
    surrogate_preview: ParticipantPreviewRead | None = None


class MatchListResponse(BaseModel):
    items: list[MatchRead]
    total: int
    page: int
    per_page: int
    pages: int


class MatchStatsResponse(BaseModel):
    total: int
    by_status: dict[str, int]


# =============================================================================
# Helpers
# =============================================================================


def _match_to_read(match: Match) -> MatchRead:
    parent_preview = (
        match_service.build_participant_preview(match.parent) if match.parent else None
    )
    surrogate_preview = (
        match_service.build_participant_preview(match.surrogate) if match.surrogate else None
    )
    return MatchRead(
        id=match.id,
        parent_id=match.parent_id,
        surrogate_id=match.surrogate_id,
        status=match.status,
        match_score=float(match.match_score) if match.match_score is not None else None,
        match_criteria=match.match_criteria,
        agency_notes=match.agency_notes,
        matched_at=match.matched_at,
        parent_accepted=match.parent_accepted,
        parent_declined=match.parent_declined,
        surrogate_accepted=match.surrogate_accepted,
        surrogate_declined=match.surrogate_declined,
        created_at=match.created_at,
        updated_at=match.updated_at,
        parent_name=parent_preview.name if parent_preview else None,
        surrogate_name=surrogate_preview.name if surrogate_preview else None,
        parent_preview=(
            ParticipantPreviewRead.model_validate(parent_preview) if parent_preview else None
        ),
        surrogate_preview=(
            ParticipantPreviewRead.model_validate(surrogate_preview)
            if surrogate_preview
            else None
        ),
    )


def _get_or_404(db: Session, match_id: UUID) -> Match:
    match = match_service.get_match(db, match_id)
    if not match:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return match


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=MatchListResponse)
def list_matches(
    db: Session = Depends(get_db),
    status_filter: MatchStatus | None = Query(None, alias="status"),
    participant_id: UUID | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
):
    """List matches, newest first."""
    matches, total = match_service.list_matches(
        db,
        status_filter=status_filter,
        participant_id=participant_id,
        page=page,
        per_page=per_page,
    )
    return MatchListResponse(
        items=[_match_to_read(m) for m in matches],
        total=total,
        page=page,
        per_page=per_page,
        pages=page_count(total, per_page),
    )


@router.get("/stats", response_model=MatchStatsResponse)
def get_match_stats(db: Session = Depends(get_db)):
    by_status = match_service.get_match_stats(db)
    return MatchStatsResponse(total=sum(by_status.values()), by_status=by_status)


@router.get("/participants/{user_id}/preview", response_model=ParticipantPreviewRead)
def get_participant_preview(user_id: UUID, db: Session = Depends(get_db)):
    """Participant card with readiness label used when building matches."""
    user = match_service.get_participant(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return ParticipantPreviewRead.model_validate(match_service.build_participant_preview(user))


@router.post(
    "",
    response_model=MatchRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_match(data: MatchCreate, db: Session = Depends(get_db)):
    """Create a match. Status defaults to Proposed."""
    try:
        match = match_service.create_match(
            db,
            parent_id=data.parent_id,
            surrogate_id=data.surrogate_id,
            status=data.status,
            matched_at=data.matched_at,
            match_score=data.match_score,
            match_criteria=data.match_criteria,
            agency_notes=data.agency_notes,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _match_to_read(_get_or_404(db, match.id))


@router.get("/{match_id}", response_model=MatchRead)
def get_match(match_id: UUID, db: Session = Depends(get_db)):
    return _match_to_read(_get_or_404(db, match_id))


@router.patch(
    "/{match_id}/status",
    response_model=MatchRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_match_status(match_id: UUID, data: MatchStatusUpdate, db: Session = Depends(get_db)):
    """Set any status. Accepted stamps matched_at."""
    match = _get_or_404(db, match_id)
    match_service.update_status(db, match, data.status)
    return _match_to_read(_get_or_404(db, match_id))


@router.patch(
    "/{match_id}/responses",
    response_model=MatchRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_match_responses(
    match_id: UUID, data: MatchResponsesUpdate, db: Session = Depends(get_db)
):
    match = _get_or_404(db, match_id)
    try:
        match_service.update_responses(db, match, data.model_dump(exclude_none=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _match_to_read(_get_or_404(db, match_id))


@router.patch(
    "/{match_id}",
    response_model=MatchRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_match_details(
    match_id: UUID, data: MatchDetailsUpdate, db: Session = Depends(get_db)
):
    match = _get_or_404(db, match_id)
    match_service.update_details(db, match, data.model_dump(exclude_unset=True))
    return _match_to_read(_get_or_404(db, match_id))


@router.delete(
    "/{match_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_match(match_id: UUID, db: Session = Depends(get_db)):
    match = _get_or_404(db, match_id)
    match_service.delete_match(db, match)
