from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError

logger = logging.getLogger(__name__)

TRACE_HEADERS = ("X-Trace-ID", "X-Trace-Id", "X-Request-ID")
RETRYABLE_METHODS = frozenset({"GET", "HEAD"})

JsonPayload = dict[str, Any] | list[Any] | None
TokenProvider = Callable[[], str | None]


def _trace_id_from(response: requests.Response) -> str | None:
    return next((response.headers[key] for key in TRACE_HEADERS if response.headers.get(key)), None)


def _error_payload(response: requests.Response) -> Mapping[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text}
    return body if isinstance(body, dict) else {"message": str(body)}


@dataclass
class HttpClient:
    """JSON-over-HTTP transport for the kas API.

    Reads (GET/HEAD) are retried on connection failures and 5xx answers with
    exponential backoff; writes are sent once. Non-2xx answers are raised as
    the matching ``ApiError`` subclass.
    """

    config: ClientConfig
    session: requests.Session | None = None
    token_provider: TokenProvider | None = None
    sleep: Callable[[float], None] = time.sleep
    default_headers: dict[str, str] = field(default_factory=lambda: {"Accept": "application/json"})

    def __post_init__(self) -> None:
        if self.session is None:
            pool = self.config.max_connections
            self.session = requests.Session()
            for scheme in ("http://", "https://"):
                self.session.mount(scheme, HTTPAdapter(pool_connections=pool, pool_maxsize=pool))

    def url_for(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def get(self, path: str, *, params: dict[str, Any] | None = None) -> JsonPayload:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: dict[str, Any]) -> JsonPayload:
        return self.request("POST", path, json_body=body)

    def put(self, path: str, body: dict[str, Any]) -> JsonPayload:
        return self.request("PUT", path, json_body=body)

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = dict(self.default_headers)
        token = self.token_provider() if self.token_provider is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        headers.update(extra or {})
        return headers

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        attempts = self.config.retries + 1 if method in RETRYABLE_METHODS else 1
        timeout = (self.config.connect_timeout_seconds, self.config.read_timeout_seconds)
        for attempt in range(1, attempts + 1):
            last_attempt = attempt == attempts
            try:
                response = self.session.request(
                    method, self.url_for(path), timeout=timeout, verify=self.config.verify_ssl, **kwargs
                )
            except requests.RequestException as exc:
                if last_attempt:
                    logger.warning(
                        "http_transport_error",
                        extra={"method": method, "path": path, "attempts": attempts, "error_type": type(exc).__name__},
                    )
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=None,
                        status_code=0,
                    ) from exc
            else:
                if response.status_code < 500 or last_attempt:
                    return response
                logger.debug("http_retry_server_error", extra={"method": method, "path": path, "status": response.status_code})
            self.sleep(self.config.retry_backoff_seconds * 2 ** (attempt - 1))
        raise RuntimeError("unreachable: retry loop exited without a response")

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> JsonPayload:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        verb = method.upper()
        started = time.monotonic()
        response = self._send(verb, path, headers=self._headers(headers), json=json_body, params=params)
        log_fields = {
            "method": verb,
            "path": path,
            "status": response.status_code,
            "duration_ms": int((time.monotonic() - started) * 1000),
        }

        if response.ok:
            logger.debug("http_request_success", extra=log_fields)
            return response.json() if response.content else None

        trace_id = _trace_id_from(response)
        logger.info("http_request_error", extra={**log_fields, "trace_id": trace_id})
        raise map_error(response.status_code, _error_payload(response), trace_id)
