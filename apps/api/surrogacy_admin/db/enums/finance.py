"""Ledger and payment enums."""

from enum import Enum


class TransactionType(str, Enum):
    """Direction of an agency ledger entry."""

    REVENUE = "Revenue"
    EXPENSE = "Expense"


class TransactionCategory(str, Enum):
    AGENCY_FEE = "Agency Fee"
    LEGAL_FEE = "Legal Fee"
    MEDICAL_FEE = "Medical Fee"
    SCREENING_FEE = "Screening Fee"
    TRAVEL = "Travel"
    ALLOWANCE = "Allowance"
    OTHER = "Other"


class TransactionStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PaymentType(str, Enum):
    """Surrogate compensation line types."""

    BASE_COMPENSATION = "Base Compensation"
    ALLOWANCE = "Allowance"
    MEDICAL = "Medical"
    TRAVEL = "Travel"
    CLOTHING = "Clothing"
    LEGAL = "Legal"
    OTHER = "Other"


class PaymentCategory(str, Enum):
    """Direction of a payment relative to the agency trust account."""

    WITHDRAWN = "Withdrawn"
    RECEIVED = "Received"


class PaymentStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"
    SCHEDULED = "Scheduled"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"
