from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import (
    ChartPeriod,
    ChartSeriesPoint,
    FavoriteRecipient,
    ListPage,
    TransferPayload,
    TransferRecord,
    TransferStatus,
)
from .base import BaseClient, parse_list


@dataclass
class TransferClient(BaseClient):
    def list_transfers(self, params: Mapping[str, Any] | None = None) -> ListPage[TransferRecord]:
        payload = self._get("/transfer", params=dict(params) if params else None)
        return parse_list(payload, TransferRecord)

    def create_transfer(self, payload: TransferPayload) -> None:
        self._post("/transfer", payload.model_dump(mode="json"))

    def update_transfer(self, transfer_id: int, payload: TransferPayload) -> None:
        self._put(f"/transfer/{transfer_id}", payload.model_dump(mode="json"))

    def update_status(self, transfer_id: int, status: TransferStatus = TransferStatus.LUNAS) -> None:
        self._put(f"/transfer/{transfer_id}/status", {"status": status.value})

    def list_favorites(self, params: Mapping[str, Any] | None = None) -> ListPage[FavoriteRecipient]:
        payload = self._get("/transfer-favorit", params=dict(params) if params else None)
        return parse_list(payload, FavoriteRecipient)

    def chart_series(self, period: ChartPeriod) -> ListPage[ChartSeriesPoint]:
        return parse_list(self._get(f"/transfer/grafik/{period.value}"), ChartSeriesPoint)
