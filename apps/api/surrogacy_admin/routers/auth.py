"""Auth router - session introspection and logout.

Sessions are issued out of band (see the issue-token CLI command).
"""

from fastapi import APIRouter, Depends, Response

from surrogacy_admin.core.deps import COOKIE_NAME, get_current_session, require_csrf_header
from surrogacy_admin.schemas.auth import MeResponse, UserSession

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me")
def get_me(session: UserSession = Depends(get_current_session)) -> MeResponse:
    """Current staff user, used by the frontend to bootstrap auth state."""
    return MeResponse(
        user_id=session.user_id,
        email=session.email,
        display_name=session.display_name,
        role=session.role,
    )


@router.post("/logout", dependencies=[Depends(require_csrf_header)])
def logout(response: Response, session: UserSession = Depends(get_current_session)):
    """Clear the session cookie."""
    response.delete_cookie(COOKIE_NAME, path="/")
    return {"status": "logged_out"}
