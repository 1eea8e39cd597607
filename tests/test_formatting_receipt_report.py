from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from openpyxl import load_workbook

from kas_dashboard.formatting import (
    format_currency,
    format_currency_simple,
    format_date_id,
    format_datetime_id,
    period_label,
)
from kas_dashboard.models import ChartPeriod, ChartSeriesPoint, TransferRecord
from kas_dashboard.receipt import build_receipt_text, receipt_filename
from kas_dashboard.report import build_transfer_report, export_transfer_report, report_filename

PRINTED_AT = datetime(2024, 5, 3, 14, 5, 9)


def _transfer(**overrides) -> TransferRecord:
    data = {
        "id": 31,
        "tanggal": "2024-05-01T03:00:00.000Z",
        "bank_tujuan": "BCA",
        "nomor_rekening": "1234567890",
        "nama_pemilik": "Budi Santoso",
        "nominal": "100000.00",
        "biaya": "5000.00",
        "keterangan": None,
        "status": None,
    }
    data.update(overrides)
    return TransferRecord.model_validate(data)


def test_format_currency() -> None:
    assert format_currency(Decimal("100000")) == "Rp 100.000,00"
    assert format_currency("1250000.5") == "Rp 1.250.000,50"
    assert format_currency(-5000) == "-Rp 5.000,00"
    assert format_currency(None) == "Rp 0,00"


def test_format_currency_simple() -> None:
    assert format_currency_simple(100000) == "Rp 100.000"
    assert format_currency_simple(1500.5) == "Rp 1.500,5"
    assert format_currency_simple("0.12345") == "Rp 0,123"


def test_dates_and_period_labels() -> None:
    assert format_date_id(date(2024, 5, 1)) == "01/05/2024"
    assert format_date_id(date(2024, 5, 1), padded=False) == "1/5/2024"
    assert format_datetime_id(PRINTED_AT) == "3/5/2024, 14.05.09"
    assert period_label(ChartPeriod.MINGGUAN) == "Mingguan"
    assert period_label("bulanan") == "Bulanan"


def test_receipt_text() -> None:
    text = build_receipt_text(_transfer())
    lines = text.split("\n")
    assert lines[1] == "=" * 32
    assert lines[2] == "        STRUK TRANSFER"
    assert "Tanggal: 01/05/2024" in lines
    assert "Nama Bank Tujuan: BCA" in lines
    assert "Nomor Rek Tujuan: 1234567890" in lines
    assert "Nama Pemilik Rekening Tujuan: Budi Santoso" in lines
    assert "Nominal: Rp 100.000" in lines
    assert "Total: Rp 105.000" in lines
    assert "Keterangan: -" in lines
    assert "    Terima Kasih" in lines
    assert receipt_filename(_transfer()) == "struk-transfer-31.txt"


def test_report_layout() -> None:
    series = [
        ChartSeriesPoint(tanggal="2024-05-01", total="2", total_nominal="200000", total_biaya="10000", total_all="210000"),
    ]
    transfers = [_transfer(), _transfer(id=32, status="lunas", bank_tujuan=None)]

    wb = build_transfer_report(ChartPeriod.HARIAN, series, transfers, printed_at=PRINTED_AT)
    ws = wb["Laporan Transfer"]

    assert wb.sheetnames == ["Laporan Transfer"]
    assert ws["A1"].value == "LAPORAN TRANSFER"
    assert ws["A2"].value == "Periode: Harian"
    assert ws["A3"].value == "Dicetak pada: 3/5/2024, 14.05.09"
    assert ws["A5"].value == "RINGKASAN"
    assert (ws["A6"].value, ws["B6"].value) == ("Total Jumlah Transaksi", 2)
    assert (ws["A7"].value, ws["B7"].value) == ("Total Nominal Transfer", 200000)
    assert (ws["A8"].value, ws["B8"].value) == ("Total Biaya Admin", 10000)
    assert (ws["A9"].value, ws["B9"].value) == ("Total Keseluruhan", 210000)
    assert ws["A12"].value == "DATA PERIODE"
    assert [cell.value for cell in ws[13]][:5] == ["Tanggal", "Jumlah Transaksi", "Total Nominal", "Total Biaya", "Total"]
    assert [cell.value for cell in ws[14]][:5] == ["2024-05-01", 2, 200000, 10000, 210000]
    assert ws["A17"].value == "DETAIL TRANSAKSI"
    assert ws["H18"].value == "Status"
    assert [cell.value for cell in ws[19]] == ["1/5/2024", "BCA", "1234567890", "Budi Santoso", 100000, 5000, 105000, "Pending"]
    assert ws["B20"].value == "-"
    assert ws["H20"].value == "lunas"
    assert ws["A1"].font.bold is True


def test_export_returns_named_xlsx_bytes() -> None:
    filename, data = export_transfer_report(ChartPeriod.BULANAN, [], [_transfer()], printed_at=PRINTED_AT)
    assert filename == "laporan-transfer-Bulanan-2024-05-03.xlsx"
    wb = load_workbook(data)
    assert wb.active["A2"].value == "Periode: Bulanan"
    assert report_filename("mingguan", date(2024, 1, 2)) == "laporan-transfer-Mingguan-2024-01-02.xlsx"


def test_export_stamps_printed_at_and_filename_from_one_clock() -> None:
    filename, data = export_transfer_report(ChartPeriod.HARIAN, [], [])

    stamped = load_workbook(data).active["A3"].value.removeprefix("Dicetak pada: ").split(",")[0]
    day, month, year = (int(part) for part in stamped.split("/"))
    assert filename == f"laporan-transfer-Harian-{date(year, month, day).isoformat()}.xlsx"
