"""Stage enums for cases and journeys."""

from enum import Enum


class CaseStage(str, Enum):
    """Ordered milestone stages of a surrogacy case."""

    MATCHING = "Matching"
    SCREENING = "Screening"
    MEDICAL = "Medical"
    LEGAL = "Legal"
    PREGNANCY = "Pregnancy"
    COMPLETED = "Completed"


class JourneyStatus(str, Enum):
    """
    Journey stages.

    All values except CANCELLED form the ordered track;
    CANCELLED is terminal and reachable from any non-final stage.
    """

    MEDICAL_SCREENING = "Medical Screening"
    LEGAL = "Legal"
    EMBRYO_TRANSFER = "Embryo Transfer"
    PREGNANCY = "Pregnancy"
    BIRTH = "Birth"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class MilestoneStatus(str, Enum):
    """Status of a scheduled journey milestone."""

    PENDING = "pending"
    IN_PROGRESS = "inProgress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    OVERDUE = "overdue"
