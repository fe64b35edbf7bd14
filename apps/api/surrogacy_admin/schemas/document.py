"""Pydantic schemas for uploaded documents."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from surrogacy_admin.db.enums import DocumentStatus


class DocumentCreate(BaseModel):
    """Register an already-uploaded document."""
    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1)
    document_type: str | None = Field(None, max_length=50)
    status: DocumentStatus = DocumentStatus.PENDING


class DocumentRead(BaseModel):
    id: UUID
    screening_id: UUID | None
    journey_id: UUID | None
    name: str
    document_type: str | None
    url: str
    status: str
    uploaded_at: datetime

    model_config = {"from_attributes": True}
