from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Protocol, Sequence

from .ui_errors import UserFacingError

LOADING_MESSAGE = "Memuat data..."


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"


class StoreLike(Protocol):
    loading: bool
    rows: Sequence[Any]
    last_error: UserFacingError | None


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None
    data_available: bool = False

    def render(self) -> dict[str, Any]:
        rendered = asdict(self)
        rendered["status"] = self.status.value
        return rendered


def resolve_state(
    *,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    trace_id: str | None = None,
    empty_message: str = "Tidak ada data",
) -> ViewState:
    """Loading wins over errors; an error with rows still on screen is only partial."""
    if is_loading:
        status, message = ViewStateStatus.LOADING, LOADING_MESSAGE
    elif error:
        status = ViewStateStatus.PARTIAL_ERROR if has_data else ViewStateStatus.FATAL_ERROR
        message = error
    elif has_data:
        status, message = ViewStateStatus.SUCCESS, None
    else:
        status, message = ViewStateStatus.EMPTY, empty_message
    return ViewState(status, message, trace_id=trace_id, data_available=has_data)


def store_view_state(store: StoreLike, *, empty_message: str = "Tidak ada data") -> ViewState:
    error = store.last_error
    return resolve_state(
        is_loading=store.loading,
        error=error.message if error is not None else None,
        has_data=bool(store.rows),
        trace_id=error.trace_id if error is not None else None,
        empty_message=empty_message,
    )
