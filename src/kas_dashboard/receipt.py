from __future__ import annotations

from .formatting import format_date_id, format_number
from .models import TransferRecord

RULE = "=" * 32


def build_receipt_text(transfer: TransferRecord) -> str:
    """Plain-text transfer receipt sized for a 32 column dot matrix printer."""
    lines = [
        "",
        RULE,
        "        STRUK TRANSFER",
        RULE,
        "",
        f"Tanggal: {format_date_id(transfer.transfer_date)}",
        "",
        f"Nama Bank Tujuan: {transfer.bank_tujuan or ''}",
        "",
        f"Nomor Rek Tujuan: {transfer.nomor_rekening or ''}",
        "",
        f"Nama Pemilik Rekening Tujuan: {transfer.nama_pemilik or ''}",
        "",
        f"Nominal: Rp {format_number(transfer.nominal)}",
        "",
        f"Total: Rp {format_number(transfer.total)}",
        "",
        f"Keterangan: {transfer.keterangan or '-'}",
        "",
        RULE,
        "    Terima Kasih",
        RULE,
        "",
    ]
    return "\n".join(lines)


def receipt_filename(transfer: TransferRecord) -> str:
    return f"struk-transfer-{transfer.id}.txt"
