from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from .models import AuthUser

ALL_CASHIERS = "all"


@dataclass(frozen=True)
class RequestDescriptor:
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def key(self) -> tuple[str, tuple[tuple[str, Any], ...]]:
        return self.path, tuple(sorted(self.params.items()))


@dataclass
class TransferFilters:
    cashier_id: int | str | None = ALL_CASHIERS
    date_filter: date | None = None
    search: str = ""


def _cashier_selected(value: int | str | None) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        clean = value.strip()
        return bool(clean) and clean.lower() != ALL_CASHIERS
    return True


def _sorted(params: dict[str, Any]) -> dict[str, Any]:
    return {key: params[key] for key in sorted(params)}


def build_transfer_query(filters: TransferFilters, user: AuthUser, *, page: int, limit: int) -> RequestDescriptor:
    """Build ``GET /transfer`` parameters from the current screen filters.

    Only an owner may narrow by cashier or date; for every other role the
    server scopes results to the caller's own id and those filters are never
    sent. Absent, blank and ``"all"`` values are dropped, never sent empty.
    """
    params: dict[str, Any] = {"page": page, "limit": limit}
    if user.is_owner:
        if _cashier_selected(filters.cashier_id):
            params["cashier_id"] = filters.cashier_id
        if filters.date_filter is not None:
            day = filters.date_filter.isoformat()
            params["startDate"] = day
            params["endDate"] = day
    if filters.search and filters.search.strip():
        params["search"] = filters.search.strip()
    return RequestDescriptor(path="/transfer", params=_sorted(params))


def build_favorite_query(search: str | None) -> RequestDescriptor:
    params: dict[str, Any] = {}
    if search is not None and search.strip():
        params["search"] = search.strip()
    return RequestDescriptor(path="/transfer-favorit", params=params)
