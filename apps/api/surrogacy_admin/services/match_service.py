"""Match service - pairing intended parents with surrogates."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.enums import MatchStatus, ParticipantStatus, UserRole
from surrogacy_admin.db.models import Match, User
from surrogacy_admin.utils.display_names import resolve_display_name

logger = logging.getLogger(__name__)

RESPONSE_FLAGS = (
    "parent_accepted",
    "parent_declined",
    "surrogate_accepted",
    "surrogate_declined",
)


# =============================================================================
# Participant previews
# =============================================================================

@dataclass(frozen=True)
class ParticipantPreview:
    """Compact participant card shown when building a match or journey."""

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


def readiness(user: User) -> tuple[str, str]:
    """(label, color) describing whether a participant can be matched."""
    if user.role == UserRole.SURROGATE.value:
        if user.status == ParticipantStatus.PREGNANT.value:
            return "Not eligible: pregnant", "red"
        if not user.profile_completed or not user.form2_completed:
            return "Needs screening", "yellow"
        return "Ready", "green"
    if not user.profile_completed:
        return "Complete intake first", "yellow"
    return "Ready", "green"


def build_participant_preview(user: User) -> ParticipantPreview:
    form_data: dict[str, Any] = user.form_data or {}
    location = ", ".join(
        part for part in (form_data.get("city"), form_data.get("state")) if part
    )
    label, color = readiness(user)
    return ParticipantPreview(
        id=user.id,
        name=resolve_display_name(user),
        email=user.email or "",
        role=user.role,
        status=user.status,
        profile_completed=bool(user.profile_completed),
        form2_completed=bool(user.form2_completed),
        location=location,
        readiness_label=label,
        readiness_color=color,
    )


def get_participant(db: Session, user_id: UUID) -> User | None:
    return db.get(User, user_id)


# =============================================================================
# Queries
# =============================================================================

def get_match(db: Session, match_id: UUID) -> Match | None:
    """Get match with both participants loaded."""
    return (
        db.query(Match)
        .options(selectinload(Match.parent), selectinload(Match.surrogate))
        .filter(Match.id == match_id)
        .first()
    )


def list_matches(
    db: Session,
    *,
    status_filter: MatchStatus | None = None,
    participant_id: UUID | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Match], int]:
    """List matches with filters and pagination, newest first."""
    query = db.query(Match).options(
        selectinload(Match.parent), selectinload(Match.surrogate)
    )
    if status_filter:
        query = query.filter(Match.status == status_filter.value)
    if participant_id:
        query = query.filter(
            or_(Match.parent_id == participant_id, Match.surrogate_id == participant_id)
        )

    total = query.count()
    matches = (
        query.order_by(Match.created_at.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return matches, total


def get_match_stats(db: Session) -> dict[str, int]:
    """Match counts per status; every status present."""
    rows = db.query(Match.status, func.count(Match.id)).group_by(Match.status).all()
    counts = {status.value: 0 for status in MatchStatus}
    for status, count in rows:
        counts[status] = count
    return counts


# =============================================================================
# Mutations
# =============================================================================

def _require_role(db: Session, user_id: UUID, role: UserRole) -> User:
    user = db.get(User, user_id)
    if not user:
        raise ValueError(f"{role.value} not found")
    if user.role != role.value:
        raise ValueError(f"User is not a {role.value}")
    return user


def create_match(
    db: Session,
    *,
    parent_id: UUID,
    surrogate_id: UUID | None = None,
    status: MatchStatus | None = None,
    matched_at: datetime | None = None,
    match_score: Decimal | float | None = None,
    match_criteria: dict[str, Any] | None = None,
    agency_notes: str | None = None,
) -> Match:
    """
    Create a match. Status defaults to Proposed.

    Raises:
        ValueError: Participant missing or has the wrong role
    """
    _require_role(db, parent_id, UserRole.INTENDED_PARENT)
    if surrogate_id:
        _require_role(db, surrogate_id, UserRole.SURROGATE)

    status = status or MatchStatus.PROPOSED
    if status == MatchStatus.ACCEPTED and matched_at is None:
        matched_at = utcnow()

    match = Match(
        parent_id=parent_id,
        surrogate_id=surrogate_id,
        status=status.value,
        matched_at=matched_at,
        match_score=match_score,
        match_criteria=match_criteria,
        agency_notes=agency_notes,
    )
    db.add(match)
    db.commit()
    db.refresh(match)
    logger.info("Match %s created with status %s", match.id, match.status)
    return match


def update_status(db: Session, match: Match, status: MatchStatus) -> Match:
    """Set any status; Accepted stamps matched_at."""
    old_status = match.status
    match.status = status.value
    if status == MatchStatus.ACCEPTED:
        match.matched_at = utcnow()
    db.commit()
    db.refresh(match)
    logger.info("Match %s status %s -> %s", match.id, old_status, match.status)
    return match


def update_responses(db: Session, match: Match, responses: dict[str, bool]) -> Match:
    """
    Set accept/decline flags independently.

    Flags are not mutually exclusive and do not change status.
    """
    for flag, value in responses.items():
        if flag not in RESPONSE_FLAGS:
            raise ValueError(f"Unknown response flag: {flag}")
        setattr(match, flag, bool(value))

    for side in ("parent", "surrogate"):
        if getattr(match, f"{side}_accepted") and getattr(match, f"{side}_declined"):
            logger.info("Match %s has %s both accepted and declined", match.id, side)

    db.commit()
    db.refresh(match)
    return match


def update_details(
    db: Session,
    match: Match,
    fields: dict[str, Any],
) -> Match:
    """Update score, notes or criteria."""
    for field in ("match_score", "agency_notes", "match_criteria"):
        if field in fields:
            setattr(match, field, fields[field])
    db.commit()
    db.refresh(match)
    return match


def delete_match(db: Session, match: Match) -> None:
    match_id = match.id
    db.delete(match)
    db.commit()
    logger.info("Match %s deleted", match_id)
