from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

NOMINAL_INVALID_MESSAGE = "Nominal harus berupa angka yang valid"
MODAL_KAS_ZERO_MESSAGE = "Modal Kas tidak perlu diisi jika nominal 0"

# plain ASCII decimal notation: no digit separators, no other scripts' digits
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    issues: list[ValidationIssue]

    def summary(self) -> str:
        return "; ".join(f"{issue.field}: {issue.reason}" for issue in self.issues)


def parse_nominal(value: Any) -> Decimal | None:
    """Parse user input into a finite Decimal; None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip()
        if not _NUMBER_RE.fullmatch(text):
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    if not parsed.is_finite():
        return None
    return parsed


def parse_form_date(value: Any) -> date | None:
    """Accept a date, a datetime or an ISO ``YYYY-MM-DD`` string; None otherwise."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _require_non_empty(value: str | None, field: str, issues: list[ValidationIssue]) -> None:
    if value is None or not str(value).strip():
        issues.append(ValidationIssue(field=field, reason="is required"))


def _require_amount(
    value: Any,
    field: str,
    issues: list[ValidationIssue],
    *,
    allow_zero: bool,
) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        issues.append(ValidationIssue(field=field, reason="is required"))
        return
    amount = parse_nominal(value)
    if amount is None:
        issues.append(ValidationIssue(field=field, reason="must be a valid number"))
    elif amount < 0 or (amount == 0 and not allow_zero):
        issues.append(ValidationIssue(field=field, reason="must be >= 0" if allow_zero else "must be greater than 0"))


def validate_transfer_form(
    *,
    tanggal: Any,
    bank_tujuan: str | None,
    nomor_rekening: str | None,
    nama_pemilik: str | None,
    nominal: Any,
    biaya: Any,
) -> ValidationResult:
    issues: list[ValidationIssue] = []
    if tanggal is None or (isinstance(tanggal, str) and not tanggal.strip()):
        issues.append(ValidationIssue(field="tanggal", reason="is required"))
    elif parse_form_date(tanggal) is None:
        issues.append(ValidationIssue(field="tanggal", reason="must be a valid date"))
    _require_non_empty(bank_tujuan, "bank_tujuan", issues)
    _require_non_empty(nomor_rekening, "nomor_rekening", issues)
    _require_non_empty(nama_pemilik, "nama_pemilik", issues)
    _require_amount(nominal, "nominal", issues, allow_zero=False)
    _require_amount(biaya, "biaya", issues, allow_zero=True)
    return ValidationResult(ok=not issues, issues=issues)
