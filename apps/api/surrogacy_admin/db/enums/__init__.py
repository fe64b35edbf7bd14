"""Enum definitions for application constants."""

from surrogacy_admin.db.enums.appointments import AppointmentStatus, AppointmentType
from surrogacy_admin.db.enums.auth import PARTICIPANT_ROLES, STAFF_ROLES, UserRole
from surrogacy_admin.db.enums.contracts import ContractStatus, ContractType
from surrogacy_admin.db.enums.finance import (
    PaymentCategory,
    PaymentStatus,
    PaymentType,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from surrogacy_admin.db.enums.matches import MatchSide, MatchStatus
from surrogacy_admin.db.enums.medical import (
    DocumentStatus,
    MedicalRecordStatus,
    MedicalRecordType,
    MedicationStatus,
    ScreeningStatus,
)
from surrogacy_admin.db.enums.messaging import MediaType
from surrogacy_admin.db.enums.participants import (
    DEFAULT_STATUS_BY_ROLE,
    GC_STATUSES,
    IP_STATUSES,
    LEGACY_STATUSES,
    ParticipantStatus,
    allowed_statuses,
)
from surrogacy_admin.db.enums.stages import CaseStage, JourneyStatus, MilestoneStatus

__all__ = [
    "AppointmentStatus",
    "AppointmentType",
    "CaseStage",
    "ContractStatus",
    "ContractType",
    "DEFAULT_STATUS_BY_ROLE",
    "DocumentStatus",
    "GC_STATUSES",
    "IP_STATUSES",
    "JourneyStatus",
    "LEGACY_STATUSES",
    "MatchSide",
    "MatchStatus",
    "MediaType",
    "MedicalRecordStatus",
    "MedicalRecordType",
    "MedicationStatus",
    "MilestoneStatus",
    "PARTICIPANT_ROLES",
    "ParticipantStatus",
    "PaymentCategory",
    "PaymentStatus",
    "PaymentType",
    "STAFF_ROLES",
    "ScreeningStatus",
    "TransactionCategory",
    "TransactionStatus",
    "TransactionType",
    "UserRole",
    "allowed_statuses",
]
