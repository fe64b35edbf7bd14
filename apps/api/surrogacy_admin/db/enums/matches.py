"""Match-related enums."""

from enum import Enum


class MatchStatus(str, Enum):
    """
    Status of a match between surrogate and intended parent.

    Free-choice vocabulary: any status may be set from any other.
    ACCEPTED stamps matched_at.
    """

    PROPOSED = "Proposed"
    PRESENTED = "Presented"
    ACCEPTED = "Accepted"
    ACTIVE = "Active"
    DELIVERED = "Delivered"
    ESCROW_CLOSURE = "Escrow Closure"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class MatchSide(str, Enum):
    """Which participant a match response belongs to."""

    PARENT = "parent"
    SURROGATE = "surrogate"
