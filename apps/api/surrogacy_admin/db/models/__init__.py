"""SQLAlchemy ORM models (re-exported so `from surrogacy_admin.db.models import X` works)."""

from surrogacy_admin.db.models.appointments import Appointment
from surrogacy_admin.db.models.baby_watch import BabyWatchUpdate
from surrogacy_admin.db.models.cases import CaseStageHistory, SurrogacyCase
from surrogacy_admin.db.models.contracts import Contract
from surrogacy_admin.db.models.finance import AgencyTransaction, Payment
from surrogacy_admin.db.models.journeys import Journey, JourneyMilestone, JourneyStageHistory
from surrogacy_admin.db.models.matches import Match
from surrogacy_admin.db.models.medical import Document, MedicalRecord, MedicalScreening, Medication
from surrogacy_admin.db.models.messaging import Conversation, ConversationParticipant, Message
from surrogacy_admin.db.models.participants import User
from surrogacy_admin.db.models.tasks import Task

__all__ = [
    "AgencyTransaction",
    "Appointment",
    "BabyWatchUpdate",
    "CaseStageHistory",
    "Contract",
    "Conversation",
    "ConversationParticipant",
    "Document",
    "Journey",
    "JourneyMilestone",
    "JourneyStageHistory",
    "Match",
    "MedicalRecord",
    "MedicalScreening",
    "Medication",
    "Message",
    "Payment",
    "SurrogacyCase",
    "Task",
    "User",
]
