from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Callable, Generic, Iterable, TypeVar

from .exceptions import ApiError
from .models import ListPage, TransferRecord
from .pagination import PaginationController
from .query import RequestDescriptor
from .ui_errors import UserFacingError, to_user_facing_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[RequestDescriptor], ListPage[T]]
RowFilter = Callable[[list[T]], list[T]]


def restrict_to_date(rows: Iterable[TransferRecord], day: date) -> list[TransferRecord]:
    """Drop transfers whose calendar date differs from ``day``.

    Owner queries already send ``startDate``/``endDate``; rows are filtered
    again here so an out-of-range row never reaches the table even when the
    server ignores the window.
    """
    return [row for row in rows if row.transfer_date == day]


class ResourceStore(Generic[T]):
    """Last fetched rows of one remote list plus loading and error state.

    Each ``reload`` takes a sequence number. Only the response of the most
    recently issued reload is applied; older ones are dropped untouched.
    """

    def __init__(
        self,
        name: str,
        fetch: Fetcher,
        *,
        pagination: PaginationController | None = None,
    ) -> None:
        self.name = name
        self.fetch = fetch
        self.pagination = pagination
        self.rows: list[T] = []
        self.loading = False
        self.last_error: UserFacingError | None = None
        self.last_descriptor: RequestDescriptor | None = None
        self._lock = threading.Lock()
        self._issued = 0

    def begin(self, descriptor: RequestDescriptor) -> int:
        with self._lock:
            self._issued += 1
            self.loading = True
            self.last_descriptor = descriptor
            return self._issued

    def reload(self, descriptor: RequestDescriptor, *, post_filter: RowFilter | None = None) -> bool:
        sequence = self.begin(descriptor)
        try:
            page = self.fetch(descriptor)
        except (ApiError, ValueError) as exc:
            return self.fail(sequence, exc)
        return self.apply(sequence, page, post_filter=post_filter)

    def apply(self, sequence: int, page: ListPage[T], *, post_filter: RowFilter | None = None) -> bool:
        rows = list(page.rows)
        if post_filter is not None:
            rows = post_filter(rows)
        with self._lock:
            if sequence != self._issued:
                logger.debug("store_stale_response_dropped", extra={"store": self.name, "sequence": sequence})
                return False
            self.rows = rows
            if self.pagination is not None:
                if page.pagination is not None:
                    self.pagination.apply_server(page.pagination)
                else:
                    self.pagination.apply_unpaginated(len(page.rows))
            self.last_error = None
            self.loading = False
        logger.debug("store_reload_success", extra={"store": self.name, "count": len(rows)})
        return True

    def fail(self, sequence: int, exc: Exception) -> bool:
        with self._lock:
            if sequence != self._issued:
                logger.debug("store_stale_failure_dropped", extra={"store": self.name, "sequence": sequence})
                return False
            self.rows = []
            self.last_error = to_user_facing_error(exc, fallback=f"Gagal memuat data {self.name}")
            self.loading = False
        logger.warning(
            "store_reload_failure",
            extra={"store": self.name, "error_type": type(exc).__name__, "error": str(exc)},
        )
        return False

    def clear(self) -> None:
        with self._lock:
            self._issued += 1
            self.rows = []
            self.loading = False
            self.last_error = None
