"""Participant status enums."""

from enum import Enum

from surrogacy_admin.db.enums.auth import UserRole


class ParticipantStatus(str, Enum):
    """Intake status for surrogates and intended parents."""

    # Surrogate (GC) specific
    NEW_APPLICATION = "New Application"
    PRE_SCREEN = "Pre-Screen"
    SCREENING_IN_PROGRESS = "Screening in Progress"
    ACCEPTED_TO_PROGRAM = "Accepted to Program"
    # Intended parent specific
    NEW_INQUIRY = "New Inquiry"
    CONSULTATION_COMPLETE = "Consultation Complete"
    INTAKE_IN_PROGRESS = "Intake in Progress"
    # Shared
    ON_HOLD = "On Hold"
    DECLINED_INACTIVE = "Declined / Inactive"
    # Legacy values still present on older records
    AVAILABLE = "Available"
    POTENTIAL = "Potential"
    RECORDS_REVIEW = "Records Review"
    SCREENING = "Screening"
    LEGAL = "Legal"
    CYCLING = "Cycling"
    PREGNANT = "Pregnant"
    TO_BE_MATCHED = "To be Matched"
    MATCHED = "Matched"
    REMATCH = "Rematch"


GC_STATUSES: tuple[ParticipantStatus, ...] = (
    ParticipantStatus.NEW_APPLICATION,
    ParticipantStatus.PRE_SCREEN,
    ParticipantStatus.SCREENING_IN_PROGRESS,
    ParticipantStatus.ACCEPTED_TO_PROGRAM,
    ParticipantStatus.ON_HOLD,
    ParticipantStatus.DECLINED_INACTIVE,
)

IP_STATUSES: tuple[ParticipantStatus, ...] = (
    ParticipantStatus.NEW_INQUIRY,
    ParticipantStatus.CONSULTATION_COMPLETE,
    ParticipantStatus.INTAKE_IN_PROGRESS,
    ParticipantStatus.ACCEPTED_TO_PROGRAM,
    ParticipantStatus.ON_HOLD,
    ParticipantStatus.DECLINED_INACTIVE,
)

LEGACY_STATUSES: tuple[ParticipantStatus, ...] = (
    ParticipantStatus.AVAILABLE,
    ParticipantStatus.POTENTIAL,
    ParticipantStatus.RECORDS_REVIEW,
    ParticipantStatus.SCREENING,
    ParticipantStatus.LEGAL,
    ParticipantStatus.CYCLING,
    ParticipantStatus.PREGNANT,
    ParticipantStatus.TO_BE_MATCHED,
    ParticipantStatus.MATCHED,
    ParticipantStatus.REMATCH,
)

DEFAULT_STATUS_BY_ROLE: dict[UserRole, ParticipantStatus] = {
    UserRole.SURROGATE: ParticipantStatus.NEW_APPLICATION,
    UserRole.INTENDED_PARENT: ParticipantStatus.NEW_INQUIRY,
}


def allowed_statuses(role: UserRole) -> tuple[ParticipantStatus, ...]:
    """Statuses a participant of the given role may hold (legacy included)."""
    if role == UserRole.SURROGATE:
        return GC_STATUSES + LEGACY_STATUSES
    if role == UserRole.INTENDED_PARENT:
        return IP_STATUSES + LEGACY_STATUSES
    return ()
