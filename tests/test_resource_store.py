from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from kas_dashboard.exceptions import ResponseFormatError, ServerError
from kas_dashboard.models import ListPage, PaginationMeta, TransferRecord
from kas_dashboard.pagination import PaginationController
from kas_dashboard.query import RequestDescriptor
from kas_dashboard.resource_store import ResourceStore, restrict_to_date

DESCRIPTOR = RequestDescriptor(path="/transfer", params={"page": 1, "limit": 10})


def _record(record_id: int, tanggal) -> TransferRecord:
    return TransferRecord(id=record_id, tanggal=tanggal, nominal=Decimal("1000"), biaya=Decimal("0"))


def test_restrict_to_date_uses_utc_calendar_day() -> None:
    rows = [
        _record(1, datetime(2024, 5, 1, 3, 0, tzinfo=timezone.utc)),
        _record(2, datetime(2024, 5, 2, 1, 0, tzinfo=timezone.utc)),
        _record(3, date(2024, 5, 1)),
    ]
    assert [row.id for row in restrict_to_date(rows, date(2024, 5, 1))] == [1, 3]


def test_reload_applies_envelope_pagination() -> None:
    pagination = PaginationController(limit=10)
    page = ListPage[TransferRecord](
        rows=[_record(1, date(2024, 5, 1))],
        pagination=PaginationMeta(page=1, limit=10, total=25),
    )
    store = ResourceStore("transfer", lambda _: page, pagination=pagination)

    assert store.reload(DESCRIPTOR) is True
    assert [row.id for row in store.rows] == [1]
    assert store.loading is False
    assert store.last_descriptor == DESCRIPTOR
    assert pagination.state.total_pages == 3


def test_bare_array_counts_rows_before_post_filter() -> None:
    pagination = PaginationController(limit=10)
    rows = [_record(1, date(2024, 5, 1)), _record(2, date(2024, 5, 2))]
    store = ResourceStore(
        "transfer",
        lambda _: ListPage[TransferRecord](rows=rows, pagination=None),
        pagination=pagination,
    )

    store.reload(DESCRIPTOR, post_filter=lambda items: restrict_to_date(items, date(2024, 5, 2)))

    assert [row.id for row in store.rows] == [2]
    assert pagination.state.total == 2
    assert pagination.state.total_pages == 1


def test_failure_empties_rows_and_keeps_pagination() -> None:
    pagination = PaginationController(limit=10)
    pagination.apply_server(PaginationMeta(page=2, limit=10, total=25))

    def fetch(_descriptor):
        raise ServerError(code="SERVER_ERROR", message="", details=None, trace_id="t-9", status_code=500)

    store = ResourceStore("transfer", fetch, pagination=pagination)
    store.rows = [_record(1, date(2024, 5, 1))]

    assert store.reload(DESCRIPTOR) is False
    assert store.rows == []
    assert store.last_error.message == "Gagal memuat data transfer"
    assert store.last_error.trace_id == "t-9"
    assert pagination.page == 2
    assert pagination.state.total == 25


def test_unexpected_shape_is_reported_as_error() -> None:
    def fetch(_descriptor):
        raise ResponseFormatError("Expected a JSON array or paginated object, got str")

    store = ResourceStore("favorit", fetch)
    assert store.reload(RequestDescriptor(path="/transfer-favorit")) is False
    assert store.rows == []
    assert store.last_error.message == "Gagal memuat data favorit"


def test_stale_response_is_dropped() -> None:
    store = ResourceStore("transfer", lambda _: ListPage[TransferRecord]())
    older = store.begin(RequestDescriptor(path="/transfer", params={"search": "a"}))
    newer = store.begin(RequestDescriptor(path="/transfer", params={"search": "ab"}))

    fresh = ListPage[TransferRecord](rows=[_record(2, date(2024, 5, 1))])
    stale = ListPage[TransferRecord](rows=[_record(1, date(2024, 5, 1))])

    assert store.apply(newer, fresh) is True
    assert store.apply(older, stale) is False
    assert [row.id for row in store.rows] == [2]
    assert store.fail(older, ValueError("late")) is False
    assert store.last_error is None


def test_clear_invalidates_in_flight_requests() -> None:
    store = ResourceStore("transfer", lambda _: ListPage[TransferRecord]())
    sequence = store.begin(DESCRIPTOR)
    store.clear()
    assert store.apply(sequence, ListPage[TransferRecord](rows=[_record(1, date(2024, 5, 1))])) is False
    assert store.rows == []
