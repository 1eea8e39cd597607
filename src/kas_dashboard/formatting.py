"""Indonesian (id-ID) rendering of money and dates."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .models import ChartPeriod
from .validation import parse_nominal

_PERIOD_LABELS = {
    ChartPeriod.HARIAN: "Harian",
    ChartPeriod.MINGGUAN: "Mingguan",
    ChartPeriod.BULANAN: "Bulanan",
}


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return ".".join(groups)


def _split(amount: Decimal, places: int) -> tuple[str, str, str]:
    quantized = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    text = format(abs(quantized), "f")
    whole, _, fraction = text.partition(".")
    return sign, _group_thousands(whole), fraction


def _to_decimal(amount: Any) -> Decimal:
    parsed = parse_nominal(amount)
    return parsed if parsed is not None else Decimal("0")


def format_currency(amount: Any) -> str:
    """``Rp 1.250.000,00`` - always two decimals."""
    sign, whole, fraction = _split(_to_decimal(amount), 2)
    return f"{sign}Rp {whole},{fraction}"


def format_number(amount: Any) -> str:
    sign, whole, fraction = _split(_to_decimal(amount), 3)
    fraction = fraction.rstrip("0")
    return f"{sign}{whole},{fraction}" if fraction else f"{sign}{whole}"


def format_currency_simple(amount: Any) -> str:
    """``Rp 1.250.000`` - decimals only when present, at most three."""
    return f"Rp {format_number(amount)}"


def format_date_id(value: date | datetime, *, padded: bool = True) -> str:
    if padded:
        return f"{value.day:02d}/{value.month:02d}/{value.year}"
    return f"{value.day}/{value.month}/{value.year}"


def format_datetime_id(value: datetime) -> str:
    return f"{format_date_id(value, padded=False)}, {value.hour:02d}.{value.minute:02d}.{value.second:02d}"


def period_label(period: ChartPeriod | str) -> str:
    try:
        return _PERIOD_LABELS[ChartPeriod(period)]
    except ValueError:
        return str(period).capitalize()
