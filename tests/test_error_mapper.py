from __future__ import annotations

from kas_dashboard.error_mapper import map_error
from kas_dashboard.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    ServerError,
    TransportError,
    ValidationError,
)
from kas_dashboard.ui_errors import to_user_facing_error


def test_error_mapper_classes() -> None:
    err = map_error(401, {"code": "INVALID_TOKEN", "message": "bad"}, "trace")
    assert isinstance(err, AuthError)
    assert err.trace_id == "trace"
    assert isinstance(map_error(403, {"message": "no"}, None), PermissionError)
    assert isinstance(map_error(400, {"message": "bad"}, None), ValidationError)
    assert isinstance(map_error(422, {"message": "bad"}, None), ValidationError)
    assert isinstance(map_error(404, {"message": "missing"}, None), NotFoundError)


def test_error_mapper_common_failures() -> None:
    conflict = map_error(409, {"code": "CONFLICT", "message": "duplicate"}, "trace-409")
    assert isinstance(conflict, ConflictError)
    assert conflict.status_code == 409
    server = map_error(502, {"code": "SERVER_ERROR", "message": "oops"}, "trace-500")
    assert isinstance(server, ServerError)
    assert "trace_id=trace-500" in str(server)


def test_error_mapper_reads_error_key_and_payload_trace() -> None:
    err = map_error(418, {"error": "Modal tidak ditemukan", "trace_id": "from-body"}, "from-header")
    assert type(err) is ApiError
    assert err.message == "Modal tidak ditemukan"
    assert err.trace_id == "from-body"


def test_error_mapper_without_payload() -> None:
    err = map_error(500, None, None)
    assert err.message == "Request failed"
    assert err.code == "HTTP_ERROR"


def test_user_facing_error_messages() -> None:
    api = to_user_facing_error(map_error(400, {"code": "BAD", "message": "Nominal wajib"}, "t1"), fallback="x")
    assert api.message == "Nominal wajib"
    assert api.trace_id == "t1"
    assert api.technical_details == "BAD (HTTP 400)"

    transport = TransportError(code="TRANSPORT_ERROR", message="refused", details=None, trace_id=None, status_code=0)
    assert to_user_facing_error(transport).message == "Tidak dapat terhubung ke server"

    other = to_user_facing_error(ValueError("boom"), fallback="Gagal memuat data transfer")
    assert other.message == "Gagal memuat data transfer"
    assert other.details == "ValueError: boom"
