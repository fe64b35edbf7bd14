"""Pydantic schemas for participants (surrogates and intended parents)."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from surrogacy_admin.db.enums import ParticipantStatus


class ParticipantCreate(BaseModel):
    """Create a participant record. Status defaults by role."""
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    status: ParticipantStatus | None = None
    source: str | None = Field(None, max_length=50)
    form_data: dict[str, Any] | None = None
    parent1: dict[str, Any] | None = None
    parent2: dict[str, Any] | None = None
    about: dict[str, Any] | None = None
    admin_notes: str | None = None


class ParticipantUpdate(BaseModel):
    """
    Partial update. A JSON blob that is provided replaces the stored one
    wholesale; omitted blobs are left alone.
    """
    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    source: str | None = Field(None, max_length=50)
    form_data: dict[str, Any] | None = None
    form2: dict[str, Any] | None = None
    form2_data: dict[str, Any] | None = None
    parent1: dict[str, Any] | None = None
    parent2: dict[str, Any] | None = None
    surrogate_related: dict[str, Any] | None = None
    about: dict[str, Any] | None = None
    attributes: dict[str, Any] | None = None
    profile_completed: bool | None = None
    form2_completed: bool | None = None
    admin_notes: str | None = None
    profile_image_url: str | None = None


class ParticipantStatusUpdate(BaseModel):
    status: ParticipantStatus
    admin_notes: str | None = Field(None, max_length=5000)


class ParticipantListItem(BaseModel):
    id: UUID
    role: str
    display_name: str = ""
    email: str | None
    status: str | None
    profile_completed: bool
    form2_completed: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ParticipantRead(ParticipantListItem):
    first_name: str | None
    last_name: str | None
    source: str | None
    form_data: dict[str, Any] | None
    form2: dict[str, Any] | None
    form2_data: dict[str, Any] | None
    parent1: dict[str, Any] | None
    parent2: dict[str, Any] | None
    surrogate_related: dict[str, Any] | None
    about: dict[str, Any] | None
    attributes: dict[str, Any] | None
    admin_notes: str | None
    medical_clearance_status: str | None
    profile_image_url: str | None
    updated_at: datetime


class ParticipantListResponse(BaseModel):
    items: list[ParticipantListItem]
    total: int
    page: int
    per_page: int
    pages: int
