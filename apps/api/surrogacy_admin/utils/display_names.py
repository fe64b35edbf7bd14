"""Display-name resolution for participant records.

Participant names live in different places depending on role and on which
intake form version was filled in. Every response that shows a participant
name goes through resolve_display_name so the same record always reads back
the same way.

Precedence:
    1. form_data.firstName + form_data.lastName
    2. parent1.name           (legacy intended parent intake)
    3. first_name + last_name (account columns)
    4. email
    5. "Unknown user"
"""

from __future__ import annotations

from typing import Any, Mapping

UNKNOWN_USER = "Unknown user"


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def _join(first: Any, last: Any) -> str:
    return " ".join(part for part in (_clean(first), _clean(last)) if part)


def resolve_display_name(record: Any | None) -> str:
    """Return the human-facing name for a user row or a plain mapping."""
    if record is None:
        return UNKNOWN_USER

    def get(key: str) -> Any:
        if isinstance(record, Mapping):
            return record.get(key)
        return getattr(record, key, None)

    form_data = get("form_data")
    if isinstance(form_data, Mapping):
        name = _join(form_data.get("firstName"), form_data.get("lastName"))
        if name:
            return name

    parent1 = get("parent1")
    if isinstance(parent1, Mapping):
        name = _clean(parent1.get("name"))
        if name:
            return name

    name = _join(get("first_name"), get("last_name"))
    if name:
        return name

    email = _clean(get("email"))
    if email:
        return email

    return UNKNOWN_USER
