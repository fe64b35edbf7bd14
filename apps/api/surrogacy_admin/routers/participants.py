"""Participant routers - /surrogates and /parents.

Both resources live in the users table and share one set of handlers,
bound to a role by _build_router.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from surrogacy_admin.core.deps import (
    get_current_session,
    get_db,
    require_csrf_header,
    require_roles,
)
from surrogacy_admin.db.enums import ParticipantStatus, UserRole
from surrogacy_admin.db.models import User
from surrogacy_admin.schemas.participant import (
    ParticipantCreate,
    ParticipantListResponse,
    ParticipantRead,
    ParticipantStatusUpdate,
    ParticipantUpdate,
)
from surrogacy_admin.services import participant_service
from surrogacy_admin.utils.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, page_count


def _build_router(prefix: str, role: UserRole, tag: str) -> APIRouter:
    router = APIRouter(
        prefix=prefix,
        tags=[tag],
        dependencies=[Depends(get_current_session)],
    )
    label = "Surrogate" if role == UserRole.SURROGATE else "Intended parent"

    def _get_or_404(db: Session, user_id: UUID) -> User:
        user = participant_service.get_participant(db, role, user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
        return user

    @router.get("", response_model=ParticipantListResponse)
    def list_participants(
        db: Session = Depends(get_db),
        status_filter: ParticipantStatus | None = Query(None, alias="status"),
        q: str | None = Query(None, max_length=100, description="Search name (columns or intake data) or email"),
        page: int = Query(1, ge=1),
        per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    ):
        users, total = participant_service.list_participants(
            db, role, status_filter=status_filter, search=q, page=page, per_page=per_page
        )
        return ParticipantListResponse(
            items=[participant_service.to_participant_list_item(u) for u in users],
            total=total,
            page=page,
            per_page=per_page,
            pages=page_count(total, per_page),
        )

    @router.post(
        "",
        response_model=ParticipantRead,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_csrf_header)],
    )
    def create_participant(data: ParticipantCreate, db: Session = Depends(get_db)):
        try:
            user = participant_service.create_participant(db, role, data)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return participant_service.to_participant_read(user)

    @router.get("/{user_id}", response_model=ParticipantRead)
    def get_participant(user_id: UUID, db: Session = Depends(get_db)):
        return participant_service.to_participant_read(_get_or_404(db, user_id))

    @router.patch(
        "/{user_id}",
        response_model=ParticipantRead,
        dependencies=[Depends(require_csrf_header)],
    )
    def update_participant(user_id: UUID, data: ParticipantUpdate, db: Session = Depends(get_db)):
        user = _get_or_404(db, user_id)
        try:
            user = participant_service.update_participant(db, user, data)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return participant_service.to_participant_read(user)

    @router.patch(
        "/{user_id}/status",
        response_model=ParticipantRead,
        dependencies=[Depends(require_csrf_header)],
    )
    def update_participant_status(
        user_id: UUID, data: ParticipantStatusUpdate, db: Session = Depends(get_db)
    ):
        user = _get_or_404(db, user_id)
        try:
            user = participant_service.update_status(db, user, data.status, data.admin_notes)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return participant_service.to_participant_read(user)

    @router.delete(
        "/{user_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        dependencies=[Depends(require_csrf_header), Depends(require_roles([UserRole.ADMIN]))],
    )
    def delete_participant(user_id: UUID, db: Session = Depends(get_db)):
        participant_service.delete_participant(db, _get_or_404(db, user_id))

    return router


surrogates_router = _build_router("/surrogates", UserRole.SURROGATE, "Surrogates")
parents_router = _build_router("/parents", UserRole.INTENDED_PARENT, "Intended Parents")
