"""Offset pagination helpers."""


def offset(page: int, limit: int) -> int:
    """Number of rows to skip for a 1-indexed page."""
    return (page - 1) * limit


def has_more(page: int, limit: int, total: int) -> bool:
    """Whether rows exist beyond the requested page.

    Evaluated against the requested page and limit, so a page past the
    end reports False.
    """
    return page * limit < total
