"""Excel export of the transfer report (summary, per-period rows and transfer detail)."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from io import BytesIO
from typing import Any, Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .aggregates import period_chart_totals
from .formatting import format_date_id, format_datetime_id, period_label
from .models import ChartPeriod, ChartSeriesPoint, TransferRecord
from .validation import parse_nominal

logger = logging.getLogger(__name__)

SHEET_TITLE = "Laporan Transfer"
PERIOD_HEADERS = ["Tanggal", "Jumlah Transaksi", "Total Nominal", "Total Biaya", "Total"]
DETAIL_HEADERS = ["Tanggal", "Bank", "Nomor Rekening", "Nama Pemilik", "Nominal", "Biaya", "Total", "Status"]
SECTION_TITLES = {"LAPORAN TRANSFER", "RINGKASAN", "DATA PERIODE", "DETAIL TRANSAKSI"}

TITLE_FONT = Font(bold=True, size=14)
SECTION_FONT = Font(bold=True, size=12)
HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")
CENTER = Alignment(horizontal="center", vertical="center")
NUMBER_FORMAT = "#,##0"

COLUMN_WIDTHS = [24, 18, 20, 24, 16, 14, 16, 12]


def _number(value: Any) -> float:
    parsed = parse_nominal(value)
    return float(parsed) if parsed is not None else 0


def report_rows(
    period: ChartPeriod | str,
    series: Sequence[ChartSeriesPoint],
    transfers: Iterable[TransferRecord],
    *,
    printed_at: datetime,
) -> list[list[Any]]:
    totals = period_chart_totals(series)
    rows: list[list[Any]] = [
        ["LAPORAN TRANSFER"],
        [f"Periode: {period_label(period)}"],
        [f"Dicetak pada: {format_datetime_id(printed_at)}"],
        [],
        ["RINGKASAN"],
        ["Total Jumlah Transaksi", totals.count],
        ["Total Nominal Transfer", float(totals.total_nominal)],
        ["Total Biaya Admin", float(totals.total_biaya)],
        ["Total Keseluruhan", float(totals.total_all)],
        [],
        [],
        ["DATA PERIODE"],
        list(PERIOD_HEADERS),
    ]
    for point in series:
        rows.append(
            [
                point.tanggal or "-",
                _number(point.total),
                _number(point.total_nominal),
                _number(point.total_biaya),
                _number(point.total_all),
            ]
        )
    rows.extend([[], [], ["DETAIL TRANSAKSI"], list(DETAIL_HEADERS)])
    for transfer in transfers:
        rows.append(
            [
                format_date_id(transfer.transfer_date, padded=False),
                transfer.bank_tujuan or "-",
                transfer.nomor_rekening or "-",
                transfer.nama_pemilik or "-",
                float(transfer.nominal),
                float(transfer.biaya),
                float(transfer.total),
                transfer.status_label,
            ]
        )
    return rows


def build_transfer_report(
    period: ChartPeriod | str,
    series: Sequence[ChartSeriesPoint],
    transfers: Iterable[TransferRecord],
    *,
    printed_at: datetime | None = None,
) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    rows = report_rows(period, series, transfers, printed_at=printed_at or datetime.now(timezone.utc))
    for row_idx, values in enumerate(rows, 1):
        for col, value in enumerate(values, 1):
            ws.cell(row=row_idx, column=col, value=value)
        first = values[0] if values else None
        if first in SECTION_TITLES and len(values) == 1:
            ws.cell(row=row_idx, column=1).font = TITLE_FONT if first == "LAPORAN TRANSFER" else SECTION_FONT
        elif values in (PERIOD_HEADERS, DETAIL_HEADERS):
            for col in range(1, len(values) + 1):
                cell = ws.cell(row=row_idx, column=col)
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL
                cell.alignment = CENTER
        else:
            for col, value in enumerate(values, 1):
                if isinstance(value, (int, float)):
                    ws.cell(row=row_idx, column=col).number_format = NUMBER_FORMAT
    for col, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width
    return wb


def report_bytes(workbook: Workbook) -> BytesIO:
    excel_file = BytesIO()
    workbook.save(excel_file)
    excel_file.seek(0)
    return excel_file


def report_filename(period: ChartPeriod | str, today: date | None = None) -> str:
    day = today or datetime.now(timezone.utc).date()
    return f"laporan-transfer-{period_label(period)}-{day.isoformat()}.xlsx"


def export_transfer_report(
    period: ChartPeriod | str,
    series: Sequence[ChartSeriesPoint],
    transfers: Sequence[TransferRecord],
    *,
    printed_at: datetime | None = None,
) -> tuple[str, BytesIO]:
    printed_at = printed_at or datetime.now(timezone.utc)
    workbook = build_transfer_report(period, series, transfers, printed_at=printed_at)
    filename = report_filename(period, printed_at.date())
    logger.info("transfer_report_exported", extra={"period": str(period), "transfers": len(transfers)})
    return filename, report_bytes(workbook)
