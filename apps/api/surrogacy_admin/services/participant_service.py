"""Participant service - surrogate and intended parent records.

Surrogates and intended parents share the users table and differ by role.
Every function takes the role so a surrogate id can never be read or edited
through the parents endpoints and vice versa.
"""

import logging
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from surrogacy_admin.db.enums import (
    DEFAULT_STATUS_BY_ROLE,
    ParticipantStatus,
    UserRole,
    allowed_statuses,
)
from surrogacy_admin.db.models import (
    Match,
    MedicalRecord,
    MedicalScreening,
    Medication,
    User,
)
from surrogacy_admin.schemas.participant import (
    ParticipantCreate,
    ParticipantListItem,
    ParticipantRead,
    ParticipantUpdate,
)
from surrogacy_admin.utils.display_names import resolve_display_name
from surrogacy_admin.utils.normalization import escape_like, normalize_email, normalize_name

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ("profile_completed", "form2_completed")


def list_participants(
    db: Session,
    role: UserRole,
    *,
    status_filter: ParticipantStatus | None = None,
    search: str | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[User], int]:
    """
    List participants of one role, newest first.

    Search matches the account name columns, email, and the intake names
    the display name is resolved from (form_data firstName/lastName,
    parent1.name).
    """
    query = db.query(User).filter(User.role == role.value)
    if status_filter:
        query = query.filter(User.status == status_filter.value)
    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        query = query.filter(
            or_(
                User.first_name.ilike(pattern, escape="\\"),
                User.last_name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
                User.form_data["firstName"].as_string().ilike(pattern, escape="\\"),
                User.form_data["lastName"].as_string().ilike(pattern, escape="\\"),
                User.parent1["name"].as_string().ilike(pattern, escape="\\"),
            )
        )

    total = query.count()
    users = (
        query.order_by(User.created_at.desc())
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return users, total


def get_participant(db: Session, role: UserRole, user_id: UUID) -> User | None:
    user = db.get(User, user_id)
    if not user or user.role != role.value:
        return None
    return user


def _check_status(role: UserRole, status: ParticipantStatus) -> None:
    if status not in allowed_statuses(role):
        raise ValueError(f"Status '{status.value}' is not valid for {role.value}")


def create_participant(db: Session, role: UserRole, data: ParticipantCreate) -> User:
    """
    Create a participant. Status defaults to the role's intake status.

    Raises:
        ValueError: Invalid status for role, or email already in use
    """
    status = data.status or DEFAULT_STATUS_BY_ROLE[role]
    _check_status(role, status)

    user = User(
        role=role.value,
        email=normalize_email(data.email),
        first_name=normalize_name(data.first_name),
        last_name=normalize_name(data.last_name),
        status=status.value,
        source=data.source,
        form_data=data.form_data,
        parent1=data.parent1,
        parent2=data.parent2,
        about=data.about,
        admin_notes=data.admin_notes,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Email already in use")
    db.refresh(user)
    logger.info("Created %s participant %s", role.value, user.id)
    return user


def update_participant(db: Session, user: User, data: ParticipantUpdate) -> User:
    """Apply provided fields; JSON blobs are replaced, not merged."""
    update_fields = data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS:
        if field in update_fields and update_fields[field] is None:
            del update_fields[field]
    if "email" in update_fields:
        update_fields["email"] = normalize_email(update_fields["email"])
    for field in ("first_name", "last_name"):
        if field in update_fields:
            update_fields[field] = normalize_name(update_fields[field])

    for field, value in update_fields.items():
        setattr(user, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValueError("Email already in use")
    db.refresh(user)
    return user


def update_status(
    db: Session,
    user: User,
    status: ParticipantStatus,
    admin_notes: str | None = None,
) -> User:
    """
    Set intake status, validated against the role's vocabulary.

    Raises:
        ValueError: Status not valid for the participant's role
    """
    _check_status(UserRole(user.role), status)
    user.status = status.value
    if admin_notes:
        user.admin_notes = admin_notes
    db.commit()
    db.refresh(user)
    return user


def delete_participant(db: Session, user: User) -> None:
    """
    Delete a participant and the rows that cannot outlive them.

    Matches where they are the parent go with them; surrogate-side matches
    lose their surrogate. Other references are nulled by the database.
    """
    db.query(Match).filter(Match.parent_id == user.id).delete(synchronize_session=False)
    db.query(Match).filter(Match.surrogate_id == user.id).update(
        {Match.surrogate_id: None}, synchronize_session=False
    )
    for model in (MedicalScreening, MedicalRecord, Medication):
        db.query(model).filter(model.surrogate_id == user.id).delete(synchronize_session=False)
    user_id, role = user.id, user.role
    db.delete(user)
    db.commit()
    logger.info("Deleted %s participant %s", role, user_id)


def to_participant_read(user: User) -> ParticipantRead:
    read = ParticipantRead.model_validate(user)
    read.display_name = resolve_display_name(user)
    return read


def to_participant_list_item(user: User) -> ParticipantListItem:
    item = ParticipantListItem.model_validate(user)
    item.display_name = resolve_display_name(user)
    return item
