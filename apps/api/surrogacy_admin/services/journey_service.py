"""Journey service - journeys, their stage track, milestones and documents.

Journeys follow JOURNEY_TRACK (Medical Screening → Legal → Embryo Transfer →
Pregnancy → Birth → Completed). Cancelled is terminal and can be entered
from any stage before Completed.
"""

import logging
import re
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.enums import JourneyStatus, UserRole
from surrogacy_admin.db.models import (
    Document,
    Journey,
    JourneyMilestone,
    JourneyStageHistory,
    Match,
    User,
)
from surrogacy_admin.schemas.document import DocumentCreate
from surrogacy_admin.schemas.journey import JourneyCreate, JourneyUpdate, MilestoneUpsert
from surrogacy_admin.services.stage_progression import (
    JOURNEY_TRACK,
    StageTransitionError,
    TimelineEntry,
    apply_transition,
    completed_at_map,
)
from surrogacy_admin.utils.display_names import resolve_display_name

logger = logging.getLogger(__name__)

CASE_NUMBER_PREFIX = "J-"
_CASE_NUMBER_RE = re.compile(r"^J-(\d+)$")


# =============================================================================
# Queries
# =============================================================================

def list_journeys(
    db: Session,
    *,
    status: JourneyStatus | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Journey], int]:
    """List journeys, newest first."""
    query = db.query(Journey).options(
        selectinload(Journey.parent), selectinload(Journey.surrogate)
    )
    if status:
        query = query.filter(Journey.status == status.value)

    total = query.count()
    journeys = (
        query.order_by(Journey.created_at.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return journeys, total


def get_journey(db: Session, journey_id: UUID) -> Journey | None:
    return (
        db.query(Journey)
        .options(
            selectinload(Journey.history),
            selectinload(Journey.parent),
            selectinload(Journey.surrogate),
        )
        .filter(Journey.id == journey_id)
        .first()
    )


def participant_names(journey: Journey) -> tuple[str | None, str | None]:
    """(parent_name, surrogate_name) through the shared display-name resolver."""
    parent_name = resolve_display_name(journey.parent) if journey.parent_id else None
    surrogate_name = resolve_display_name(journey.surrogate) if journey.surrogate_id else None
    return parent_name, surrogate_name


def count_by_status(db: Session) -> dict[str, int]:
    rows = (
        db.query(Journey.status, func.count(Journey.id))
        .group_by(Journey.status)
        .all()
    )
    counts = {status.value: 0 for status in JourneyStatus}
    for status, count in rows:
        counts[status] = count
    return counts


# =============================================================================
# Create / update
# =============================================================================

def next_case_number(db: Session) -> str:
    """Next free J-00001 style number."""
    highest = 0
    for (number,) in db.query(Journey.case_number).filter(
        Journey.case_number.like(f"{CASE_NUMBER_PREFIX}%")
    ):
        found = _CASE_NUMBER_RE.match(number or "")
        if found:
            highest = max(highest, int(found.group(1)))
    return f"{CASE_NUMBER_PREFIX}{highest + 1:05d}"


def _require_participant(db: Session, user_id: UUID | None, role: UserRole) -> None:
    if user_id is None:
        return
    user = db.get(User, user_id)
    if not user:
        raise ValueError(f"{role.value} {user_id} not found")
    if user.role != role.value:
        raise ValueError(f"User {user_id} is not a {role.value}")


def create_journey(db: Session, data: JourneyCreate) -> Journey:
    """
    Start a journey at Medical Screening.

    Raises:
        ValueError: Match/participant missing or case number taken
    """
    parent_id = data.parent_id
    surrogate_id = data.surrogate_id
    if data.match_id:
        match = db.get(Match, data.match_id)
        if not match:
            raise ValueError("Match not found")
        parent_id = match.parent_id
        surrogate_id = match.surrogate_id

    _require_participant(db, parent_id, UserRole.INTENDED_PARENT)
    _require_participant(db, surrogate_id, UserRole.SURROGATE)

    case_number = data.case_number.strip() if data.case_number else next_case_number(db)
    if db.query(Journey.id).filter(Journey.case_number == case_number).first():
        raise ValueError(f"Case number {case_number} already exists")

    journey = Journey(
        case_number=case_number,
        match_id=data.match_id,
        parent_id=parent_id,
        surrogate_id=surrogate_id,
        case_manager_id=data.case_manager_id,
        status=JOURNEY_TRACK.first,
        estimated_delivery_date=data.estimated_delivery_date,
        medical_records=[],
        legal_agreements=[],
        journey_notes=[],
    )
    db.add(journey)
    db.commit()
    db.refresh(journey)
    logger.info("Journey %s (%s) started", journey.id, journey.case_number)
    return journey


def update_journey(db: Session, journey: Journey, data: JourneyUpdate) -> Journey:
    """Apply a partial update; JSON blobs are replaced wholesale."""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(journey, field, value)
    db.commit()
    db.refresh(journey)
    return journey


# =============================================================================
# Stage track
# =============================================================================

def transition_journey(
    db: Session,
    journey: Journey,
    *,
    target: str,
    actor_user_id: UUID | None,
    notes: str | None = None,
) -> Journey:
    """
    Move the journey to a later stage (or Cancelled).

    Completed stamps completed_at; Cancelled stamps cancelled_at.
    """
    extra: dict = {}
    now = utcnow()
    if target == JourneyStatus.COMPLETED.value:
        extra["completed_at"] = now
    elif target == JourneyStatus.CANCELLED.value:
        extra["cancelled_at"] = now

    apply_transition(
        db,
        journey,
        track=JOURNEY_TRACK,
        stage_attr="status",
        history_model=JourneyStageHistory,
        history_fk="journey_id",
        target=target,
        actor_user_id=actor_user_id,
        notes=notes,
        extra_values=extra,
    )
    return get_journey(db, journey.id) or journey


def progress_journey(
    db: Session,
    journey: Journey,
    *,
    actor_user_id: UUID | None,
    notes: str | None = None,
) -> Journey:
    if JOURNEY_TRACK.is_terminal(journey.status):
        raise StageTransitionError(f"Journey is {journey.status}")
    target = JOURNEY_TRACK.next_stage(journey.status)
    if target is None:
        raise StageTransitionError("Journey is already at the final stage")
    return transition_journey(
        db, journey, target=target, actor_user_id=actor_user_id, notes=notes
    )


def cancel_journey(
    db: Session,
    journey: Journey,
    *,
    actor_user_id: UUID | None,
    notes: str | None = None,
) -> Journey:
    return transition_journey(
        db,
        journey,
        target=JourneyStatus.CANCELLED.value,
        actor_user_id=actor_user_id,
        notes=notes,
    )


def get_next_stage(journey: Journey) -> str | None:
    if JOURNEY_TRACK.is_terminal(journey.status):
        return None
    return JOURNEY_TRACK.next_stage(journey.status)


def get_progress_percent(journey: Journey) -> float | None:
    return JOURNEY_TRACK.progress_percent(journey.status)


def get_timeline(journey: Journey) -> list[TimelineEntry]:
    return JOURNEY_TRACK.timeline(journey.status, completed_at_map(journey.history))


# =============================================================================
# Milestones
# =============================================================================

def list_milestones(db: Session, journey_id: UUID) -> list[JourneyMilestone]:
    return (
        db.query(JourneyMilestone)
        .filter(JourneyMilestone.journey_id == journey_id)
        .order_by(JourneyMilestone.scheduled_date.asc(), JourneyMilestone.created_at.asc())
        .all()
    )


def upsert_milestone(
    db: Session, journey: Journey, data: MilestoneUpsert
) -> JourneyMilestone:
    """
    Update the milestone with data.id, or insert a new one.

    Raises:
        ValueError: data.id given but not a milestone of this journey
    """
    values = data.model_dump(exclude={"id"})
    values["status"] = data.status.value

    if data.id:
        milestone = db.get(JourneyMilestone, data.id)
        if not milestone or milestone.journey_id != journey.id:
            raise ValueError("Milestone not found for this journey")
        for field, value in values.items():
            setattr(milestone, field, value)
    else:
        milestone = JourneyMilestone(journey_id=journey.id, **values)
        db.add(milestone)

    db.commit()
    db.refresh(milestone)
    return milestone


# =============================================================================
# Documents
# =============================================================================

def list_documents(db: Session, journey_id: UUID) -> list[Document]:
    return (
        db.query(Document)
        .filter(Document.journey_id == journey_id)
        .order_by(Document.uploaded_at.desc())
        .all()
    )


def add_document(db: Session, journey: Journey, data: DocumentCreate) -> Document:
    document = Document(
        journey_id=journey.id,
        name=data.name,
        url=data.url,
        document_type=data.document_type,
        status=data.status.value,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document
