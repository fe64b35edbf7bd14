"""Pagination utilities for list endpoints."""

# Pagination limits
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed for `total` rows."""
    return (total + per_page - 1) // per_page if per_page > 0 else 0
