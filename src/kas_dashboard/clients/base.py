from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from ..exceptions import ResponseFormatError
from ..http_client import HttpClient, JsonPayload
from ..models import ListPage, PaginationMeta


@dataclass
class BaseClient:
    http: HttpClient

    def _get(self, path: str, params: dict[str, Any] | None = None) -> JsonPayload:
        return self.http.get(path, params=params)

    def _post(self, path: str, body: dict[str, Any]) -> JsonPayload:
        return self.http.post(path, body)

    def _put(self, path: str, body: dict[str, Any]) -> JsonPayload:
        return self.http.put(path, body)


def parse_list(payload: JsonPayload, item_type: type) -> ListPage:
    """Accept both ``{"data": [...], "pagination": {...}}`` and a bare JSON array."""
    adapter = TypeAdapter(list[item_type])
    if isinstance(payload, dict) and "data" in payload and payload.get("pagination"):
        raw_rows = payload.get("data")
        rows = adapter.validate_python(raw_rows if isinstance(raw_rows, list) else [])
        pagination = PaginationMeta.model_validate(payload["pagination"])
        return ListPage[item_type](rows=rows, pagination=pagination)
    if isinstance(payload, list):
        return ListPage[item_type](rows=adapter.validate_python(payload), pagination=None)
    if payload is None:
        return ListPage[item_type](rows=[], pagination=None)
    raise ResponseFormatError(f"Expected a JSON array or paginated object, got {type(payload).__name__}")
