from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Generic, Hashable, TypeVar

from .exceptions import ApiError
from .ui_errors import to_user_facing_error
from .validation import NOMINAL_INVALID_MESSAGE, parse_nominal

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)

Writer = Callable[[K, Decimal], None]
ExtraRule = Callable[[K, Decimal], "str | None"]


class EditState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SAVING = "saving"


@dataclass(frozen=True)
class EditResult:
    ok: bool
    error: str | None = None
    validation: bool = False
    trace_id: str | None = None


def stringify_value(value: Any) -> str:
    if isinstance(value, Decimal):
        # "100000.00" from the API is edited as "100000"
        normalized = value.normalize()
        if normalized == normalized.to_integral_value():
            return str(normalized.quantize(Decimal(1)))
        return format(normalized, "f")
    return str(value)


class EditSession(Generic[K]):
    """Edit of a single nominal value at a time, keyed by row (or channel) id.

    IDLE -> EDITING on ``start``; EDITING -> IDLE on ``cancel``; EDITING ->
    SAVING -> IDLE on a successful ``save`` (then ``on_saved`` reloads the
    lists); SAVING -> EDITING when the write fails, with the draft kept.
    """

    def __init__(
        self,
        name: str,
        write: Writer,
        *,
        on_saved: Callable[[], None] | None = None,
        extra_rule: ExtraRule | None = None,
        failure_message: str = "Gagal menyimpan data",
        use_server_message: bool = True,
    ) -> None:
        self.name = name
        self.write = write
        self.on_saved = on_saved
        self.extra_rule = extra_rule
        self.failure_message = failure_message
        self.use_server_message = use_server_message
        self.state = EditState.IDLE
        self.target_id: K | None = None
        self.draft = ""
        self.last_error: str | None = None
        self._lock = threading.Lock()

    @property
    def saving(self) -> bool:
        return self.state is EditState.SAVING

    def is_editing(self, target_id: K) -> bool:
        return self.state is not EditState.IDLE and self.target_id == target_id

    def start(self, target_id: K, current_value: Any) -> bool:
        with self._lock:
            if self.state is EditState.SAVING:
                return False
            if self.state is EditState.EDITING and self.target_id != target_id:
                logger.debug("edit_implicitly_cancelled", extra={"session": self.name, "target": str(self.target_id)})
            self.state = EditState.EDITING
            self.target_id = target_id
            self.draft = stringify_value(current_value)
            self.last_error = None
            return True

    def set_draft(self, value: str) -> None:
        if self.state is EditState.EDITING:
            self.draft = value

    def cancel(self) -> None:
        with self._lock:
            if self.state is EditState.SAVING:
                return
            self._reset_locked()

    def save(self) -> EditResult:
        with self._lock:
            if self.state is EditState.SAVING:
                return EditResult(ok=False, error="Penyimpanan sedang berlangsung")
            if self.state is not EditState.EDITING or self.target_id is None:
                return EditResult(ok=False, error="Tidak ada data yang sedang diedit")
            target_id = self.target_id
            nominal = parse_nominal(self.draft)
            if nominal is None:
                return self._reject_locked(NOMINAL_INVALID_MESSAGE)
            if self.extra_rule is not None:
                message = self.extra_rule(target_id, nominal)
                if message:
                    return self._reject_locked(message)
            self.state = EditState.SAVING
            self.last_error = None

        try:
            self.write(target_id, nominal)
        except (ApiError, ValueError) as exc:
            error = to_user_facing_error(exc, fallback=self.failure_message)
            logger.exception("edit_save_failure", extra={"session": self.name, "target": str(target_id)})
            with self._lock:
                self.state = EditState.EDITING
                message = error.message if self.use_server_message else None
                self.last_error = message or self.failure_message
            return EditResult(ok=False, error=self.last_error, trace_id=error.trace_id)
        except BaseException:
            with self._lock:
                self.state = EditState.EDITING
                self.last_error = self.failure_message
            raise

        with self._lock:
            self._reset_locked()
        logger.info("edit_save_success", extra={"session": self.name, "target": str(target_id)})
        if self.on_saved is not None:
            self.on_saved()
        return EditResult(ok=True)

    def _reject_locked(self, message: str) -> EditResult:
        self.last_error = message
        return EditResult(ok=False, error=message, validation=True)

    def _reset_locked(self) -> None:
        self.state = EditState.IDLE
        self.target_id = None
        self.draft = ""
        self.last_error = None
