"""Request dependencies: database session, staff authentication, CSRF."""

from typing import Generator
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from surrogacy_admin.core.security import decode_session_token
from surrogacy_admin.db.session import SessionLocal

COOKIE_NAME = "sa_session"
CSRF_HEADER = "X-Requested-With"
CSRF_HEADER_VALUE = "XMLHttpRequest"


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed when the response is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_id_from_claims(claims: dict) -> UUID:
    try:
        return UUID(str(claims.get("sub")))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session")


def get_current_user(request: Request, db: Session = Depends(get_db)):
    """
    Resolve the account behind the session cookie.

    Rejects with 401 when the cookie is missing, the JWT fails to verify,
    the account is gone or disabled, or the token_version claim no longer
    matches (sessions revoked).
    """
    from surrogacy_admin.db.models import User

    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        claims = decode_session_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")

    user = db.get(User, _user_id_from_claims(claims))
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=401, detail="Account disabled")
    if claims.get("token_version") != user.token_version:
        raise HTTPException(status_code=401, detail="Session revoked")
    return user


def get_current_session(request: Request, db: Session = Depends(get_db)):
    """
    Staff session for admin endpoints.

    Surrogates and intended parents have accounts as well, but they get a
    403 here.
    """
    from surrogacy_admin.db.enums import STAFF_ROLES, UserRole
    from surrogacy_admin.schemas.auth import UserSession
    from surrogacy_admin.utils.display_names import resolve_display_name

    user = get_current_user(request, db)

    if not UserRole.has_value(user.role):
        raise HTTPException(
            status_code=403,
            detail=f"Unknown role '{user.role}'. Contact administrator.",
        )
    role = UserRole(user.role)
    if role not in STAFF_ROLES:
        raise HTTPException(status_code=403, detail="Staff access required")

    return UserSession(
        user_id=user.id,
        role=role,
        email=user.email,
        display_name=resolve_display_name(user),
    )


def require_roles(allowed_roles: list):
    """Build a dependency that admits only the given staff roles."""

    def dependency(request: Request, db: Session = Depends(get_db)):
        session = get_current_session(request, db)
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Role '{session.role.value}' not authorized for this action",
            )
        return session

    return dependency


def require_csrf_header(request: Request) -> None:
    """Mutating endpoints must carry X-Requested-With: XMLHttpRequest (403 otherwise)."""
    if request.headers.get(CSRF_HEADER) != CSRF_HEADER_VALUE:
        raise HTTPException(
            status_code=403,
            detail=f"Missing CSRF header. Include '{CSRF_HEADER}: {CSRF_HEADER_VALUE}'",
        )
