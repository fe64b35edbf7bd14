"""Appointment enums."""

from enum import Enum


class AppointmentType(str, Enum):
    CONSULTATION = "consultation"
    MEDICAL = "medical"
    LEGAL = "legal"
    PSYCHOLOGICAL = "psychological"
    SCREENING = "screening"
    GENERAL = "general"


class AppointmentStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
