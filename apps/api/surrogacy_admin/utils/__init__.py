"""Utility modules."""

from surrogacy_admin.utils.display_names import UNKNOWN_USER, resolve_display_name
from surrogacy_admin.utils.normalization import (
    escape_like,
    normalize_email,
    normalize_name,
)
from surrogacy_admin.utils.pagination import page_count

__all__ = [
    # Display names
    "UNKNOWN_USER",
    "resolve_display_name",
    # Normalization
    "escape_like",
    "normalize_email",
    "normalize_name",
    # Pagination
    "page_count",
]
