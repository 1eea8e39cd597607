from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from .aggregates import FormTotals, transfer_form_totals
from .clients.transfer_client import TransferClient
from .edit_session import stringify_value
from .exceptions import ApiError
from .models import FavoriteRecipient, TransferPayload, TransferRecord
from .ui_errors import to_user_facing_error
from .validation import ValidationResult, parse_form_date, parse_nominal, validate_transfer_form

logger = logging.getLogger(__name__)


@dataclass
class TransferFormState:
    tanggal: date | str = field(default_factory=date.today)
    bank_tujuan: str = ""
    nomor_rekening: str = ""
    nama_pemilik: str = ""
    nominal: str = ""
    biaya: str = ""
    total_uang: str = ""
    keterangan: str = ""


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    error: str | None = None
    validation: ValidationResult | None = None
    trace_id: str | None = None


class TransferForm:
    """Create/edit form for a transfer.

    ``total_uang`` (cash handed over) only feeds the change calculation and is
    never sent to the server.
    """

    def __init__(
        self,
        client: TransferClient,
        *,
        on_submitted: Callable[[], None] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client
        self.on_submitted = on_submitted
        self.today = today
        self.state = TransferFormState(tanggal=today())
        self.editing_id: int | None = None
        self.visible = False
        self.submitting = False
        self.last_error: str | None = None
        self._lock = threading.Lock()

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def open(self) -> None:
        self.visible = True

    def reset(self) -> None:
        self.state = TransferFormState(tanggal=self.today())
        self.editing_id = None
        self.visible = False
        self.last_error = None

    def update(self, **values: object) -> None:
        for name, value in values.items():
            if not hasattr(self.state, name):
                raise AttributeError(f"Unknown transfer form field: {name}")
            setattr(self.state, name, value)

    def start_edit(self, transfer: TransferRecord) -> None:
        self.state = TransferFormState(
            tanggal=transfer.transfer_date,
            bank_tujuan=transfer.bank_tujuan or "",
            nomor_rekening=transfer.nomor_rekening or "",
            nama_pemilik=transfer.nama_pemilik or "",
            nominal=stringify_value(transfer.nominal),
            biaya=stringify_value(transfer.biaya),
            keterangan=transfer.keterangan or "",
        )
        self.editing_id = transfer.id
        self.visible = True
        self.last_error = None

    def apply_favorite(self, favorite: FavoriteRecipient) -> None:
        self.state.bank_tujuan = favorite.bank_tujuan
        self.state.nomor_rekening = favorite.nomor_rekening
        self.state.nama_pemilik = favorite.nama_pemilik
        self.visible = True

    def totals(self) -> FormTotals:
        return transfer_form_totals(self.state.nominal, self.state.biaya, self.state.total_uang)

    def validate(self) -> ValidationResult:
        return validate_transfer_form(
            tanggal=self.state.tanggal,
            bank_tujuan=self.state.bank_tujuan,
            nomor_rekening=self.state.nomor_rekening,
            nama_pemilik=self.state.nama_pemilik,
            nominal=self.state.nominal,
            biaya=self.state.biaya,
        )

    def to_payload(self) -> TransferPayload:
        return TransferPayload(
            tanggal=parse_form_date(self.state.tanggal),
            bank_tujuan=self.state.bank_tujuan.strip(),
            nomor_rekening=self.state.nomor_rekening.strip(),
            nama_pemilik=self.state.nama_pemilik.strip(),
            nominal=parse_nominal(self.state.nominal),
            biaya=parse_nominal(self.state.biaya),
            keterangan=self.state.keterangan,
        )

    def submit(self) -> SubmitResult:
        with self._lock:
            if self.submitting:
                return SubmitResult(ok=False, error="Penyimpanan sedang berlangsung")
            result = self.validate()
            if not result.ok:
                self.last_error = result.summary()
                return SubmitResult(ok=False, error=self.last_error, validation=result)
            self.submitting = True
            self.last_error = None
            editing_id = self.editing_id

        try:
            payload = self.to_payload()
            if editing_id is not None:
                self.client.update_transfer(editing_id, payload)
            else:
                self.client.create_transfer(payload)
        except (ApiError, ValueError) as exc:
            error = to_user_facing_error(exc, fallback="Gagal menyimpan data transfer")
            logger.exception("transfer_submit_failure", extra={"transfer_id": editing_id})
            with self._lock:
                self.last_error = error.message
            return SubmitResult(ok=False, error=error.message, trace_id=error.trace_id)
        finally:
            with self._lock:
                self.submitting = False

        logger.info("transfer_submit_success", extra={"transfer_id": editing_id, "mode": "create" if editing_id is None else "update"})
        with self._lock:
            self.reset()
        if self.on_submitted is not None:
            self.on_submitted()
        return SubmitResult(ok=True)
