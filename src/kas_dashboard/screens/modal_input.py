from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from ..aggregates import current_value, user_totals
from ..channels import channel_info, channel_label, reject_zero_modal_kas, visible_channels
from ..clients.modal_client import ModalClient
from ..edit_session import EditSession
from ..formatting import format_currency
from ..models import AuthUser, BalanceRecord, ChannelId
from ..query import RequestDescriptor
from ..resource_store import ResourceStore
from ..view_state import store_view_state

logger = logging.getLogger(__name__)

BALANCES = RequestDescriptor(path="/modal")
HISTORY = RequestDescriptor(path="/modal/history")


class ModalInputScreen:
    """Per-channel working capital: current balance cards plus the deposit history."""

    def __init__(self, client: ModalClient, user: AuthUser) -> None:
        self.client = client
        self.user = user
        self.balances: ResourceStore[BalanceRecord] = ResourceStore("modal", lambda _: client.list_balances())
        self.history: ResourceStore[BalanceRecord] = ResourceStore("riwayat modal", lambda _: client.list_history())
        self.balance_edit: EditSession[ChannelId] = EditSession(
            "modal_balance",
            self._write_balance,
            on_saved=self.load,
            extra_rule=reject_zero_modal_kas,
            failure_message="Gagal menyimpan data modal",
            use_server_message=False,
        )
        self.history_edit: EditSession[int] = EditSession(
            "modal_history",
            self._write_history,
            on_saved=self.load,
            failure_message="Gagal mengupdate data modal",
        )

    def _write_balance(self, channel: ChannelId, nominal: Decimal) -> None:
        self.client.create_balance(channel, nominal)

    def _write_history(self, record_id: int, nominal: Decimal) -> None:
        self.client.update_balance(record_id, nominal)

    @property
    def saving(self) -> bool:
        return self.balance_edit.saving or self.history_edit.saving

    def load(self) -> None:
        self.balances.reload(BALANCES)
        self.history.reload(HISTORY)

    def channels(self) -> list[ChannelId]:
        return visible_channels(self.user.role)

    def current_value(self, channel: ChannelId | str) -> Decimal:
        return current_value(channel, self.user.role, self.user.id, self.balances.rows)

    def totals(self) -> dict[str, Decimal]:
        return user_totals(self.user, self.balances.rows, self.history.rows)

    def start_balance_edit(self, channel: ChannelId | str) -> bool:
        if channel not in self.channels():
            channel_id = channel.value if isinstance(channel, ChannelId) else str(channel)
            logger.warning("modal_channel_not_visible", extra={"channel": channel_id, "role": self.user.role})
            return False
        channel = ChannelId(channel)
        return self.balance_edit.start(channel, self.current_value(channel))

    def start_history_edit(self, record_id: int) -> bool:
        record = next((row for row in self.history.rows if row.id == record_id), None)
        if record is None:
            return False
        return self.history_edit.start(record_id, record.nominal)

    def render(self) -> dict[str, Any]:
        cards = []
        for channel in self.channels():
            value = self.current_value(channel)
            info = channel_info(channel)
            cards.append(
                {
                    "id": channel.value,
                    "name": info.name if info else channel_label(channel),
                    "value": value,
                    "display": format_currency(value),
                    "editing": self.balance_edit.is_editing(channel),
                    "draft": self.balance_edit.draft if self.balance_edit.is_editing(channel) else None,
                }
            )
        history = [
            {
                "id": row.id,
                "channel": channel_label(row.modal_type),
                "nominal": row.nominal,
                "display": format_currency(row.nominal),
                "created_at": row.created_at,
                "editing": self.history_edit.is_editing(row.id),
            }
            for row in self.history.rows
        ]
        totals = self.totals()
        return {
            "cards": cards,
            "history": history,
            "total_current": format_currency(totals["total_current"]),
            "total_deposit": format_currency(totals["total_deposit"]),
            "saving": self.saving,
            "errors": [
                message
                for message in (self.balance_edit.last_error, self.history_edit.last_error)
                if message
            ],
            "view": store_view_state(self.balances, empty_message="Belum ada data modal").render(),
            "history_view": store_view_state(self.history, empty_message="Belum ada riwayat modal").render(),
        }
