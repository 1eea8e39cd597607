"""Totals computed from rows that are already loaded. Nothing here does I/O."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Sequence

from .channels import visible_channels
from .models import AuthUser, BalanceRecord, ChannelId, ChartSeriesPoint, Role
from .validation import parse_nominal

ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodTotals:
    count: int
    total_nominal: Decimal
    total_biaya: Decimal
    total_all: Decimal


@dataclass(frozen=True)
class FormTotals:
    total: Decimal
    kembalian: Decimal


def _channel_value(channel: ChannelId | str) -> str:
    return channel.value if isinstance(channel, ChannelId) else channel


def _scoped(records: Iterable[BalanceRecord], role: str, user_id: int | None) -> Iterable[BalanceRecord]:
    if role == Role.KASIR.value:
        return (record for record in records if record.user_id == user_id)
    return records


def latest_record(
    channel: ChannelId | str,
    role: str,
    user_id: int | None,
    records: Iterable[BalanceRecord],
) -> BalanceRecord | None:
    """Newest record of ``channel`` in the caller's scope; equal timestamps go to the highest id."""
    wanted = _channel_value(channel)
    candidates = [record for record in _scoped(records, role, user_id) if record.modal_type == wanted]
    if not candidates:
        return None
    return max(candidates, key=lambda record: (record.created_at, record.id))


def current_value(
    channel: ChannelId | str,
    role: str,
    user_id: int | None,
    records: Iterable[BalanceRecord],
) -> Decimal:
    latest = latest_record(channel, role, user_id, records)
    return latest.nominal if latest is not None else ZERO


def total_current_across_channels(role: str, user_id: int | None, records: Sequence[BalanceRecord]) -> Decimal:
    return sum(
        (current_value(channel, role, user_id, records) for channel in visible_channels(role)),
        ZERO,
    )


def total_deposit(role: str, user_id: int | None, history: Iterable[BalanceRecord]) -> Decimal:
    return sum((record.nominal for record in _scoped(history, role, user_id)), ZERO)


def user_totals(user: AuthUser, records: Sequence[BalanceRecord], history: Sequence[BalanceRecord]) -> dict[str, Decimal]:
    return {
        "total_current": total_current_across_channels(user.role, user.id, records),
        "total_deposit": total_deposit(user.role, user.id, history),
    }


def _lenient_decimal(value: Any) -> Decimal:
    parsed = parse_nominal(value)
    return parsed if parsed is not None else ZERO


def _lenient_int(value: Any) -> int:
    parsed = parse_nominal(value)
    return int(parsed) if parsed is not None else 0


def period_chart_totals(series: Iterable[ChartSeriesPoint]) -> PeriodTotals:
    count = 0
    total_nominal = ZERO
    total_biaya = ZERO
    total_all = ZERO
    for point in series:
        count += _lenient_int(point.total)
        total_nominal += _lenient_decimal(point.total_nominal)
        total_biaya += _lenient_decimal(point.total_biaya)
        total_all += _lenient_decimal(point.total_all)
    return PeriodTotals(count=count, total_nominal=total_nominal, total_biaya=total_biaya, total_all=total_all)


def transfer_form_totals(nominal: Any, biaya: Any, total_uang: Any) -> FormTotals:
    """Running totals shown under the transfer form.

    ``total`` stays 0 until both nominal and biaya hold numbers; ``kembalian``
    is the change owed for the cash handed over and goes negative when the
    customer paid too little.
    """
    parsed_nominal = parse_nominal(nominal)
    parsed_biaya = parse_nominal(biaya)
    if parsed_nominal is None or parsed_biaya is None:
        total = ZERO
    else:
        total = parsed_nominal + parsed_biaya
    cash = parse_nominal(total_uang)
    kembalian = cash - total if cash is not None and total > 0 else ZERO
    return FormTotals(total=total, kembalian=kembalian)
