"""Page/limit normalization shared by list endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_request(page: int | None, limit: int | None, default_limit: int, max_limit: int) -> PageRequest:
    """Clamp page/limit to sane values; invalid input falls back to defaults."""
    resolved_page = page if page and page > 0 else 1
    resolved_limit = limit if limit and limit > 0 else default_limit
    return PageRequest(page=resolved_page, limit=min(resolved_limit, max_limit))
