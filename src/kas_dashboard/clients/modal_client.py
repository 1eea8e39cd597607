from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..models import BalanceRecord, ChannelId, ListPage
from .base import BaseClient, parse_list


@dataclass
class ModalClient(BaseClient):
    def list_balances(self) -> ListPage[BalanceRecord]:
        return parse_list(self._get("/modal"), BalanceRecord)

    def list_history(self) -> ListPage[BalanceRecord]:
        return parse_list(self._get("/modal/history"), BalanceRecord)

    def create_balance(self, modal_type: ChannelId | str, nominal: Decimal) -> None:
        channel = modal_type.value if isinstance(modal_type, ChannelId) else modal_type
        self._post("/modal", {"modal_type": channel, "nominal": float(nominal)})

    def update_balance(self, record_id: int, nominal: Decimal) -> None:
        self._put(f"/modal/{record_id}", {"nominal": float(nominal)})
