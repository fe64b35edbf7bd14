"""Case milestone service - create cases and walk them through the case track."""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from surrogacy_admin.db.enums import CaseStage
from surrogacy_admin.db.models import CaseStageHistory, SurrogacyCase, User
from surrogacy_admin.schemas.case import CaseCreate
from surrogacy_admin.services.stage_progression import (
    CASE_TRACK,
    StageTransitionError,
    TimelineEntry,
    apply_transition,
    completed_at_map,
)
from surrogacy_admin.utils.display_names import resolve_display_name

logger = logging.getLogger(__name__)


def list_cases(
    db: Session,
    *,
    stage: CaseStage | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[SurrogacyCase], int]:
    """List cases, most recently updated first."""
    query = db.query(SurrogacyCase)
    if stage:
        query = query.filter(SurrogacyCase.current_stage == stage.value)

    total = query.count()
    cases = (
        query.order_by(SurrogacyCase.updated_at.desc(), SurrogacyCase.created_at.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return cases, total


def get_case(db: Session, case_id: UUID) -> SurrogacyCase | None:
    """Get case with its stage history."""
    return (
        db.query(SurrogacyCase)
        .options(selectinload(SurrogacyCase.history))
        .filter(SurrogacyCase.id == case_id)
        .first()
    )


def _participant_name(db: Session, user_id: UUID | None, fallback: str | None) -> str:
    if user_id:
        user = db.get(User, user_id)
        if not user:
            raise ValueError(f"Participant {user_id} not found")
        return resolve_display_name(user)
    return (fallback or "").strip()


def create_case(db: Session, data: CaseCreate) -> SurrogacyCase:
    """
    Open a case at the first stage with an empty history.

    Names are denormalized from the participant records when ids are given.
    """
    surrogate_name = _participant_name(db, data.surrogate_id, data.surrogate_name)
    parent_name = _participant_name(db, data.parent_id, data.parent_name)
    if not surrogate_name and not parent_name:
        raise ValueError("A case needs at least one participant")

    case = SurrogacyCase(
        surrogate_id=data.surrogate_id,
        parent_id=data.parent_id,
        surrogate_name=surrogate_name,
        parent_name=parent_name,
        current_stage=CASE_TRACK.first,
        notes=data.notes,
    )
    db.add(case)
    db.commit()
    db.refresh(case)
    logger.info("Case %s opened at %s", case.id, case.current_stage)
    return case


def update_notes(db: Session, case: SurrogacyCase, notes: str | None) -> SurrogacyCase:
    case.notes = notes
    db.commit()
    db.refresh(case)
    return case


def progress_case(
    db: Session,
    case: SurrogacyCase,
    *,
    actor_user_id: UUID | None,
    notes: str | None = None,
) -> SurrogacyCase:
    """
    Advance the case to the next stage.

    Raises:
        StageTransitionError: Case is already at the final stage
        StageConflictError: Case moved concurrently
    """
    target = CASE_TRACK.next_stage(case.current_stage)
    if target is None:
        raise StageTransitionError("Case is already at the final stage")
    return transition_case(db, case, target=target, actor_user_id=actor_user_id, notes=notes)


def transition_case(
    db: Session,
    case: SurrogacyCase,
    *,
    target: str,
    actor_user_id: UUID | None,
    notes: str | None = None,
) -> SurrogacyCase:
    """Move the case to an explicit later stage."""
    apply_transition(
        db,
        case,
        track=CASE_TRACK,
        stage_attr="current_stage",
        history_model=CaseStageHistory,
        history_fk="case_id",
        target=target,
        actor_user_id=actor_user_id,
        notes=notes,
    )
    return get_case(db, case.id) or case


def get_next_stage(case: SurrogacyCase) -> str | None:
    return CASE_TRACK.next_stage(case.current_stage)


def get_progress_percent(case: SurrogacyCase) -> float | None:
    return CASE_TRACK.progress_percent(case.current_stage)


def get_timeline(case: SurrogacyCase) -> list[TimelineEntry]:
    return CASE_TRACK.timeline(case.current_stage, completed_at_map(case.history))


def count_by_stage(db: Session) -> dict[str, int]:
    """Case counts per stage; every stage is present, zero when empty."""
    rows = (
        db.query(SurrogacyCase.current_stage, func.count(SurrogacyCase.id))
        .group_by(SurrogacyCase.current_stage)
        .all()
    )
    counts = {stage: 0 for stage in CASE_TRACK.stages}
    for stage, count in rows:
        counts[stage] = count
    return counts
