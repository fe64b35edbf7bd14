"""Authentication-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel

from surrogacy_admin.db.enums import UserRole


class UserSession(BaseModel):
    """
    Session context for authenticated staff requests.

    Returned by the get_current_session dependency. Anything that records
    "who did this" (stage progressions, screening reviews, ledger entries)
    reads the actor from here.
    """
    user_id: UUID
    role: UserRole  # Validated enum
    email: str | None = None
    display_name: str


class MeResponse(BaseModel):
    """Response schema for GET /auth/me."""
    user_id: UUID
    email: str | None
    display_name: str
    role: UserRole
