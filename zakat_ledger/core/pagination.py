"""Pagination — page arithmetic shared by every list endpoint.

Invariants:
    - page >= 1 (defaults to 1); per_page in [1, MAX_PAGE_SIZE] (defaults to DEFAULT_PAGE_SIZE)
    - offset = (page - 1) * per_page
    - total_pages = ceil(total / per_page); 0 when total is 0
"""

from dataclasses import dataclass
from math import ceil

DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_params(cls, page: int | None = None, per_page: int | None = None) -> "PageRequest":
        """Out-of-range values are clamped, never rejected."""
        page = page if page and page > 0 else 1
        if not per_page or per_page < 1:
            per_page = DEFAULT_PAGE_SIZE
        return cls(page=page, per_page=min(per_page, MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def meta(self, total: int) -> dict:
        return {
            "page": self.page,
            "per_page": self.per_page,
            "total": total,
            "total_pages": total_pages(total, self.per_page),
        }


def total_pages(total: int, per_page: int) -> int:
    return ceil(total / per_page) if total else 0
