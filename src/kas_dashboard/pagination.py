from __future__ import annotations

import math
from dataclasses import dataclass

from .models import PaginationMeta


@dataclass
class PaginationState:
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0


@dataclass(frozen=True)
class DisplayRange:
    start: int
    end: int
    total: int

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def total_pages_for(total: int, limit: int) -> int:
    if limit <= 0:
        raise ValueError("limit must be > 0")
    return math.ceil(max(total, 0) / limit)


class PaginationController:
    def __init__(self, limit: int = 10) -> None:
        if limit <= 0:
            raise ValueError("limit must be > 0")
        self.request_limit = limit
        self.state = PaginationState(page=1, limit=limit)

    @property
    def page(self) -> int:
        return self.state.page

    @property
    def limit(self) -> int:
        return self.request_limit

    @property
    def last_page(self) -> int:
        return max(1, self.state.total_pages)

    def set_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range requests are ignored and return False."""
        if page < 1 or page > self.last_page:
            return False
        self.state.page = page
        return True

    def can_prev(self) -> bool:
        return self.state.page > 1

    def can_next(self) -> bool:
        return self.state.page < self.state.total_pages

    def on_filter_change(self) -> None:
        self.state.page = 1

    def apply_server(self, meta: PaginationMeta) -> None:
        limit = meta.limit if meta.limit > 0 else self.state.limit
        total = max(meta.total, 0)
        self.state = PaginationState(
            page=max(1, meta.page),
            limit=limit,
            total=total,
            total_pages=meta.total_pages if meta.total_pages is not None else total_pages_for(total, limit),
        )

    def apply_unpaginated(self, row_count: int) -> None:
        # a bare array is a single page holding every row; request_limit is left alone
        self.state = PaginationState(
            page=1,
            limit=max(self.request_limit, row_count),
            total=row_count,
            total_pages=1 if row_count else 0,
        )

    def display_range(self) -> DisplayRange:
        state = self.state
        if state.total <= 0:
            return DisplayRange(start=0, end=0, total=0)
        start = (state.page - 1) * state.limit + 1
        end = min(state.page * state.limit, state.total)
        return DisplayRange(start=start, end=end, total=state.total)
