"""Structured logging helpers (PHI-safe)."""

from contextvars import ContextVar, Token
from typing import Any


_REQUEST_ID: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> Token:
    """Bind the request id for the current request context."""
    return _REQUEST_ID.set(request_id)


def reset_request_id(token: Token) -> None:
    _REQUEST_ID.reset(token)


def get_request_id() -> str | None:
    return _REQUEST_ID.get()


def build_log_context(
    *,
    user_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
) -> dict[str, Any]:
    """Return a PHI-safe log context dict.

    Only identifiers and request metadata are included; participant names,
    emails and medical fields must never be passed here.
    """
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    request_id = request_id or get_request_id()
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    return context
