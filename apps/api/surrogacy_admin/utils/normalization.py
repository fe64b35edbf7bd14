"""Input clean-up applied before participant and staff rows are written."""


def normalize_email(email: str | None) -> str | None:
    """Trimmed, lowercased address; blank input becomes None."""
    cleaned = (email or "").strip().lower()
    return cleaned or None


def normalize_name(name: str | None) -> str | None:
    """Collapse runs of whitespace; blank input becomes None."""
    cleaned = " ".join((name or "").split())
    return cleaned or None


def escape_like(value: str) -> str:
    """Make user search text match literally inside a LIKE pattern."""
    for char in ("\\", "%", "_"):
        value = value.replace(char, "\\" + char)
    return value
