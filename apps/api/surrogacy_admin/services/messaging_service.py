"""Messaging service - staff/participant conversations.

Each conversation keeps a denormalized preview (last_message,
last_message_at) and a per-participant unread counter. Both are updated in
the same transaction as the message write.
"""

import logging
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import Session, selectinload

from surrogacy_admin.db.base import utcnow
from surrogacy_admin.db.enums import MediaType
from surrogacy_admin.db.models import Conversation, ConversationParticipant, Message, User
from surrogacy_admin.schemas.messaging import MessageCreate
from surrogacy_admin.utils.display_names import resolve_display_name

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100
CLEARED_PREVIEW = "Chat cleared"


def message_preview(content: str | None, media_type: MediaType | str | None) -> str:
    """Conversation list preview for a new message."""
    if media_type:
        kind = media_type.value if isinstance(media_type, MediaType) else media_type
        return f"Sent a {kind}"
    return (content or "")[:PREVIEW_LENGTH]


def list_conversations(db: Session, user_id: UUID) -> list[Conversation]:
    """Conversations the user takes part in, latest activity first."""
    return (
        db.query(Conversation)
        .join(ConversationParticipant)
        .filter(ConversationParticipant.user_id == user_id)
        .options(selectinload(Conversation.participants))
        .order_by(
            func.coalesce(Conversation.last_message_at, Conversation.created_at).desc()
        )
        .all()
    )


def get_conversation(db: Session, conversation_id: UUID) -> Conversation | None:
    return (
        db.query(Conversation)
        .options(
            selectinload(Conversation.participants),
            selectinload(Conversation.messages),
        )
        .filter(Conversation.id == conversation_id)
        .first()
    )


def find_direct_conversation(
    db: Session, user_a: UUID, user_b: UUID
) -> Conversation | None:
    """Existing conversation with exactly these two participants."""
    candidates = (
        db.query(Conversation)
        .join(ConversationParticipant)
        .filter(ConversationParticipant.user_id == user_a)
        .options(selectinload(Conversation.participants))
        .all()
    )
    for conversation in candidates:
        members = {p.user_id for p in conversation.participants}
        if members == {user_a, user_b}:
            return conversation
    return None


def create_conversation(db: Session, creator_id: UUID, user_id: UUID) -> tuple[Conversation, bool]:
    """
    Open a conversation between the creator and a user.

    Returns (conversation, created). An existing two-party conversation is
    returned unchanged.
    """
    if creator_id == user_id:
        raise ValueError("Cannot start a conversation with yourself")
    creator = db.get(User, creator_id)
    other = db.get(User, user_id)
    if not creator or not other:
        raise ValueError("User not found")

    existing = find_direct_conversation(db, creator_id, user_id)
    if existing:
        return existing, False

    conversation = Conversation(created_by_user_id=creator_id, last_message="")
    conversation.participants = [
        ConversationParticipant(user_id=creator.id, display_name=resolve_display_name(creator)),
        ConversationParticipant(user_id=other.id, display_name=resolve_display_name(other)),
    ]
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    logger.info("Conversation %s created", conversation.id)
    return conversation, True


def _participant(conversation: Conversation, user_id: UUID) -> ConversationParticipant | None:
    for participant in conversation.participants:
        if participant.user_id == user_id:
            return participant
    return None


def send_message(
    db: Session,
    conversation: Conversation,
    sender_id: UUID,
    data: MessageCreate,
) -> Message:
    """
    Append a message, refresh the preview and bump unread counts for
    everyone except the sender.
    """
    sender_entry = _participant(conversation, sender_id)
    if sender_entry is None:
        raise ValueError("Sender is not part of this conversation")

    now = utcnow()
    message = Message(
        conversation_id=conversation.id,
        sender_id=sender_id,
        sender_name=sender_entry.display_name,
        content=data.content,
        media_url=data.media_url,
        media_type=data.media_type.value if data.media_type else None,
        reply_to_id=data.reply_to_id,
        created_at=now,
    )
    db.add(message)

    conversation.last_message = message_preview(data.content, data.media_type)
    conversation.last_message_at = now
    db.execute(
        update(ConversationParticipant)
        .where(
            ConversationParticipant.conversation_id == conversation.id,
            ConversationParticipant.user_id != sender_id,
        )
        .values(unread_count=ConversationParticipant.unread_count + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.refresh(message)
    return message


def mark_read(db: Session, conversation: Conversation, user_id: UUID) -> Conversation:
    participant = _participant(conversation, user_id)
    if participant is None:
        raise ValueError("User is not part of this conversation")
    participant.unread_count = 0
    db.commit()
    db.refresh(conversation)
    return conversation


def unread_count_for(conversation: Conversation, user_id: UUID) -> int:
    participant = _participant(conversation, user_id)
    return participant.unread_count if participant else 0


def delete_message(db: Session, conversation: Conversation, message_id: UUID) -> bool:
    message = db.get(Message, message_id)
    if not message or message.conversation_id != conversation.id:
        return False
    db.delete(message)
    db.commit()
    return True


def clear_chat(db: Session, conversation: Conversation) -> Conversation:
    """Delete every message and reset the preview."""
    db.query(Message).filter(Message.conversation_id == conversation.id).delete(
        synchronize_session=False
    )
    conversation.last_message = CLEARED_PREVIEW
    conversation.last_message_at = utcnow()
    db.commit()
    db.expire(conversation)
    logger.info("Conversation %s cleared", conversation.id)
    return conversation


def delete_conversation(db: Session, conversation: Conversation) -> None:
    conversation_id = conversation.id
    db.delete(conversation)
    db.commit()
    logger.info("Conversation %s deleted", conversation_id)
