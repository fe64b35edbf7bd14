"""Medical screening and records enums."""

from enum import Enum


class ScreeningStatus(str, Enum):
    """
    Medical screening review status.

    CLEARED and REJECTED are review decisions and are copied onto the
    surrogate's medical_clearance_status.
    """

    PENDING = "Pending"
    IN_REVIEW = "In Review"
    CLEARED = "Cleared"
    REJECTED = "Rejected"


class DocumentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


class MedicalRecordType(str, Enum):
    SCREENING = "Screening"
    ULTRASOUND = "Ultrasound"
    LAB_RESULT = "Lab Result"
    CHECK_UP = "Check-up"
    PROCEDURE = "Procedure"
    OTHER = "Other"


class MedicalRecordStatus(str, Enum):
    VERIFIED = "Verified"
    PENDING = "Pending"
    FLAGGED = "Flagged"


class MedicationStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    DISCONTINUED = "Discontinued"
