"""Auth-related enums."""

from enum import Enum


class UserRole(str, Enum):
    """
    Account roles.

    Participants (intended parents, surrogates) and agency staff share the
    users table. Only STAFF_ROLES may call the admin API.
    """

    INTENDED_PARENT = "Intended Parent"
    SURROGATE = "Surrogate"
    AGENCY_STAFF = "Agency Staff"
    ADMIN = "Admin"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


STAFF_ROLES = frozenset({UserRole.AGENCY_STAFF, UserRole.ADMIN})
PARTICIPANT_ROLES = frozenset({UserRole.INTENDED_PARENT, UserRole.SURROGATE})
