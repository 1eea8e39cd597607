from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(ApiError):
    """Session token missing, expired or rejected."""


class PermissionError(ApiError):
    """Role is not allowed to touch the resource."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    """400/422 returned by the API for a rejected payload."""


class ConflictError(ApiError):
    pass


class RateLimitError(ApiError):
    pass


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class ResponseFormatError(ValueError):
    """Response body does not have the expected JSON shape."""
