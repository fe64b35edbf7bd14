"""Conversations router - staff messaging with participants."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import get_current_session, get_db, require_csrf_header
from surrogacy_admin.db.models import Conversation
from surrogacy_admin.schemas.auth import UserSession
from surrogacy_admin.schemas.messaging import (
    ConversationCreate,
    ConversationDetail,
    ConversationRead,
    MessageCreate,
    MessageRead,
)
from surrogacy_admin.services import messaging_service

router = APIRouter(
    prefix="/conversations",
    tags=["Messaging"],
    dependencies=[Depends(get_current_session)],
)


def _to_read(conversation: Conversation, user_id: UUID) -> ConversationRead:
    read = ConversationRead.model_validate(conversation)
    read.unread_count = messaging_service.unread_count_for(conversation, user_id)
    return read


def _get_or_404(db: Session, conversation_id: UUID) -> Conversation:
    conversation = messaging_service.get_conversation(db, conversation_id)
    if not conversation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Conversation not found")
    return conversation


@router.get("", response_model=list[ConversationRead])
def list_conversations(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Caller's conversations, latest activity first."""
    conversations = messaging_service.list_conversations(db, session.user_id)
    return [_to_read(c, session.user_id) for c in conversations]


@router.post(
    "",
    response_model=ConversationRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def create_conversation(
    data: ConversationCreate,
    response: Response,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Open a conversation with a user; returns the existing one (200) if present."""
    try:
        conversation, created = messaging_service.create_conversation(
            db, session.user_id, data.user_id
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not created:
        response.status_code = status.HTTP_200_OK
    return _to_read(conversation, session.user_id)


@router.get("/{conversation_id}", response_model=ConversationDetail)
def get_conversation(
    conversation_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Conversation with its messages in send order."""
    conversation = _get_or_404(db, conversation_id)
    detail = ConversationDetail.model_validate(conversation)
    detail.unread_count = messaging_service.unread_count_for(conversation, session.user_id)
    return detail


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_csrf_header)],
)
def send_message(
    conversation_id: UUID,
    data: MessageCreate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    conversation = _get_or_404(db, conversation_id)
    try:
        return messaging_service.send_message(db, conversation, session.user_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.post(
    "/{conversation_id}/read",
    response_model=ConversationRead,
    dependencies=[Depends(require_csrf_header)],
)
def mark_read(
    conversation_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Reset the caller's unread count."""
    conversation = _get_or_404(db, conversation_id)
    try:
        conversation = messaging_service.mark_read(db, conversation, session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return _to_read(conversation, session.user_id)


@router.delete(
    "/{conversation_id}/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_message(conversation_id: UUID, message_id: UUID, db: Session = Depends(get_db)):
    conversation = _get_or_404(db, conversation_id)
    if not messaging_service.delete_message(db, conversation, message_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")


@router.post(
    "/{conversation_id}/clear",
    response_model=ConversationRead,
    dependencies=[Depends(require_csrf_header)],
)
def clear_chat(
    conversation_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    conversation = messaging_service.clear_chat(db, _get_or_404(db, conversation_id))
    return _to_read(conversation, session.user_id)


@router.delete(
    "/{conversation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_csrf_header)],
)
def delete_conversation(conversation_id: UUID, db: Session = Depends(get_db)):
    messaging_service.delete_conversation(db, _get_or_404(db, conversation_id))
