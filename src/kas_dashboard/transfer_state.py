from __future__ import annotations

import logging
from dataclasses import dataclass

from .clients.transfer_client import TransferClient
from .models import TransferRecord, TransferStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferActionAvailability:
    can_mark_lunas: bool
    can_edit: bool
    can_print_receipt: bool


def transfer_action_availability(status: str | None, *, busy: bool = False) -> TransferActionAvailability:
    """Row actions for a transfer in ``status``; nothing is offered while a write is running."""
    if busy:
        return TransferActionAvailability(False, False, False)
    status_value = (status or "").strip().lower()
    return TransferActionAvailability(
        can_mark_lunas=status_value == TransferStatus.PENDING.value,
        can_edit=True,
        can_print_receipt=True,
    )


def availability_for(record: TransferRecord, *, busy: bool = False) -> TransferActionAvailability:
    return transfer_action_availability(record.status, busy=busy)


def mark_lunas(client: TransferClient, transfer_id: int) -> None:
    client.update_status(transfer_id, TransferStatus.LUNAS)
    logger.info("transfer_marked_lunas", extra={"transfer_id": transfer_id})
