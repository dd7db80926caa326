"""Lenient page/limit handling for paginated listings.

Query values arrive as raw strings and are never rejected: anything that
is not an integer falls back to the default, and in-range clamping applies
to the rest.
"""

from __future__ import annotations

import math

from pydantic import BaseModel


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest OFFSET PostgreSQL accepts (bigint).
MAX_OFFSET = 2**63 - 1


class Pagination(BaseModel):
    """Resolved paging window."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Rows to skip, capped at the largest bigint."""
        return min((self.page - 1) * self.limit, MAX_OFFSET)

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` items (0 when empty)."""
        return math.ceil(total / self.limit) if total > 0 else 0


def _parse_int(value: str | int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def resolve_pagination(
    page: str | int | None = None,
    limit: str | int | None = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Pagination:
    """Turn raw ``page``/``limit`` query values into a valid window.

    - page: integer >= 1; missing, non-numeric or < 1 becomes 1
    - limit: missing or non-numeric becomes ``default_limit``; otherwise
      clamped to ``[1, max_limit]``
    """
    parsed_page = _parse_int(page)
    parsed_limit = _parse_int(limit)

    resolved_page = parsed_page if parsed_page is not None and parsed_page >= 1 else DEFAULT_PAGE
    if parsed_limit is None:
        resolved_limit = default_limit
    else:
        resolved_limit = min(max(parsed_limit, 1), max_limit)

    return Pagination(page=resolved_page, limit=resolved_limit)
