"""Pydantic schemas for conversations and messages."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from surrogacy_admin.db.enums import MediaType


class ConversationCreate(BaseModel):
    """Open (or reuse) a two-party conversation with a user."""
    user_id: UUID


class MessageCreate(BaseModel):
    content: str | None = Field(None, max_length=10000)
    media_url: str | None = None
    media_type: MediaType | None = None
    reply_to_id: UUID | None = None

    @model_validator(mode="after")
    def require_body(self):
        if not (self.content and self.content.strip()) and not self.media_url:
            raise ValueError("Message needs content or media")
        if self.media_url and self.media_type is None:
            raise ValueError("media_type is required with media_url")
        return self


class ParticipantRead(BaseModel):
    user_id: UUID
    display_name: str
    unread_count: int

    model_config = {"from_attributes": True}


class MessageRead(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID | None
    sender_name: str | None
    content: str | None
    media_url: str | None
    media_type: str | None
    reply_to_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationRead(BaseModel):
    id: UUID
    participants: list[ParticipantRead]
    last_message: str | None
    last_message_at: datetime | None
    unread_count: int = 0  # for the caller
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationDetail(ConversationRead):
    messages: list[MessageRead] = []
