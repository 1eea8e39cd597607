from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from functools import partial
from io import BytesIO
from typing import TYPE_CHECKING, Any, Callable

from ..aggregates import period_chart_totals
from ..clients.transfer_client import TransferClient
from ..clients.users_client import UsersClient
from ..debounce import Debouncer, Scheduler
from ..exceptions import ApiError
from ..formatting import format_currency, format_currency_simple, format_date_id, period_label
from ..models import (
    AuthUser,
    ChartPeriod,
    ChartSeriesPoint,
    FavoriteRecipient,
    ListPage,
    TransferRecord,
    UserSummary,
)
from ..pagination import PaginationController
from ..query import ALL_CASHIERS, RequestDescriptor, TransferFilters, build_favorite_query, build_transfer_query
from ..receipt import build_receipt_text
from ..report import export_transfer_report
from ..resource_store import ResourceStore, restrict_to_date
from ..transfer_form import SubmitResult, TransferForm
from ..transfer_state import availability_for, mark_lunas
from ..ui_errors import to_user_facing_error
from ..view_state import store_view_state

if TYPE_CHECKING:
    from ..session import ApiSession

logger = logging.getLogger(__name__)

USERS = RequestDescriptor(path="/user")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    error: str | None = None
    trace_id: str | None = None


class TransferScreen:
    """Transfer list with filters, favourites, the per-period chart and the entry form.

    Every trigger is an explicit method. Filter changes move back to page 1
    before reloading; search goes through the debouncer.
    """

    def __init__(
        self,
        client: TransferClient,
        users: UsersClient,
        user: AuthUser,
        *,
        page_limit: int = 10,
        debounce_ms: int = 500,
        scheduler: Scheduler | None = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.client = client
        self.users = users
        self.user = user
        self.filters = TransferFilters(cashier_id=ALL_CASHIERS, date_filter=today())
        self.pagination = PaginationController(limit=page_limit)
        self.period = ChartPeriod.HARIAN
        self.favorite_search = ""
        self.updating_status: int | None = None
        self.last_error: str | None = None

        self.transfers: ResourceStore[TransferRecord] = ResourceStore(
            "transfer", lambda d: client.list_transfers(d.params), pagination=self.pagination
        )
        self.favorites: ResourceStore[FavoriteRecipient] = ResourceStore(
            "favorit", lambda d: client.list_favorites(d.params)
        )
        self.cashiers: ResourceStore[UserSummary] = ResourceStore("kasir", lambda _: users.list_cashiers())
        self.charts: dict[ChartPeriod, ResourceStore[ChartSeriesPoint]] = {
            period: ResourceStore(f"grafik {period.value}", partial(self._fetch_chart, period))
            for period in ChartPeriod
        }
        self.search_debouncer = Debouncer(self.reload_transfers, wait_ms=debounce_ms, scheduler=scheduler)
        self.form = TransferForm(client, on_submitted=self._after_submit, today=today)

    @classmethod
    def from_session(cls, session: ApiSession, *, scheduler: Scheduler | None = None) -> TransferScreen:
        return cls(
            session.transfer_client(),
            session.users_client(),
            session.require_user(),
            page_limit=session.config.transfer_page_limit,
            debounce_ms=session.config.search_debounce_ms,
            scheduler=scheduler,
        )

    def _fetch_chart(self, period: ChartPeriod, _descriptor: RequestDescriptor) -> ListPage[ChartSeriesPoint]:
        return self.client.chart_series(period)

    # loaders

    def reload_transfers(self) -> bool:
        descriptor = build_transfer_query(
            self.filters, self.user, page=self.pagination.page, limit=self.pagination.limit
        )
        post_filter = None
        if self.user.is_owner and self.filters.date_filter is not None:
            post_filter = partial(restrict_to_date, day=self.filters.date_filter)
        return self.transfers.reload(descriptor, post_filter=post_filter)

    def reload_favorites(self) -> bool:
        return self.favorites.reload(build_favorite_query(self.favorite_search))

    def reload_cashiers(self) -> bool:
        if not self.user.is_owner:
            return False
        return self.cashiers.reload(USERS)

    def reload_chart(self) -> bool:
        return self.charts[self.period].reload(RequestDescriptor(path=f"/transfer/grafik/{self.period.value}"))

    # events

    def open(self) -> None:
        self.reload_cashiers()
        self.reload_transfers()
        self.reload_favorites()
        self.reload_chart()

    def close(self) -> None:
        self.search_debouncer.cancel()

    def set_cashier(self, cashier_id: int | str | None) -> None:
        self.filters.cashier_id = cashier_id if cashier_id is not None else ALL_CASHIERS
        self.pagination.on_filter_change()
        self.reload_transfers()
        self.reload_chart()

    def set_date_filter(self, day: date | None) -> None:
        self.filters.date_filter = day
        self.pagination.on_filter_change()
        self.reload_transfers()

    def set_search(self, text: str) -> None:
        self.filters.search = text
        self.pagination.on_filter_change()
        self.search_debouncer.trigger()

    def set_page(self, page: int) -> bool:
        if not self.pagination.set_page(page):
            logger.debug("transfer_page_rejected", extra={"page": page, "last_page": self.pagination.last_page})
            return False
        self.reload_transfers()
        return True

    def set_period(self, period: ChartPeriod | str) -> None:
        self.period = ChartPeriod(period)
        self.reload_chart()

    def set_favorite_search(self, text: str) -> None:
        self.favorite_search = text
        self.reload_favorites()

    def use_favorite(self, favorite: FavoriteRecipient) -> None:
        self.form.apply_favorite(favorite)

    def start_edit(self, transfer_id: int) -> bool:
        record = self.find_transfer(transfer_id)
        if record is None:
            return False
        self.form.start_edit(record)
        return True

    def submit_form(self) -> SubmitResult:
        return self.form.submit()

    def _after_submit(self) -> None:
        self.pagination.on_filter_change()
        self.reload_transfers()
        self.reload_favorites()

    def mark_lunas(self, transfer_id: int) -> ActionResult:
        record = self.find_transfer(transfer_id)
        if record is not None and not availability_for(record).can_mark_lunas:
            return ActionResult(ok=False, error="Transfer sudah lunas")
        if self.updating_status is not None:
            return ActionResult(ok=False, error="Perubahan status sedang berlangsung")
        self.updating_status = transfer_id
        try:
            mark_lunas(self.client, transfer_id)
        except (ApiError, ValueError) as exc:
            error = to_user_facing_error(exc, fallback="Unknown error")
            logger.exception("transfer_status_update_failure", extra={"transfer_id": transfer_id})
            self.last_error = f"Gagal mengubah status transfer: {error.message or 'Unknown error'}"
            return ActionResult(ok=False, error=self.last_error, trace_id=error.trace_id)
        finally:
            self.updating_status = None
        self.last_error = None
        self.reload_transfers()
        return ActionResult(ok=True)

    def receipt(self, transfer_id: int) -> str | None:
        record = self.find_transfer(transfer_id)
        return build_receipt_text(record) if record is not None else None

    def export_report(self, *, printed_at: datetime | None = None) -> tuple[str, BytesIO]:
        return export_transfer_report(
            self.period,
            self.charts[self.period].rows,
            self.transfers.rows,
            printed_at=printed_at,
        )

    # views

    def find_transfer(self, transfer_id: int) -> TransferRecord | None:
        return next((row for row in self.transfers.rows if row.id == transfer_id), None)

    def render(self) -> dict[str, Any]:
        busy = self.updating_status is not None
        rows = []
        for row in self.transfers.rows:
            actions = availability_for(row, busy=busy)
            rows.append(
                {
                    "id": row.id,
                    "tanggal": format_date_id(row.transfer_date),
                    "bank_tujuan": row.bank_tujuan,
                    "nomor_rekening": row.nomor_rekening,
                    "nama_pemilik": row.nama_pemilik,
                    "nominal": format_currency(row.nominal),
                    "biaya": format_currency(row.biaya),
                    "total": format_currency(row.total),
                    "status": row.status_label,
                    "can_mark_lunas": actions.can_mark_lunas,
                    "can_edit": actions.can_edit,
                    "can_print_receipt": actions.can_print_receipt,
                }
            )
        totals = period_chart_totals(self.charts[self.period].rows)
        form_totals = self.form.totals()
        display = self.pagination.display_range()
        return {
            "rows": rows,
            "view": store_view_state(self.transfers, empty_message="Belum ada data transfer").render(),
            "pagination": {
                "page": self.pagination.page,
                "total_pages": self.pagination.state.total_pages,
                "start": display.start,
                "end": display.end,
                "total": display.total,
                "can_prev": self.pagination.can_prev(),
                "can_next": self.pagination.can_next(),
            },
            "cashiers": [{"id": cashier.id, "username": cashier.username} for cashier in self.cashiers.rows],
            "favorites": [favorite.model_dump() for favorite in self.favorites.rows],
            "chart": {
                "period": period_label(self.period),
                "series": [point.model_dump() for point in self.charts[self.period].rows],
                "count": totals.count,
                "total_nominal": format_currency_simple(totals.total_nominal),
                "total_biaya": format_currency_simple(totals.total_biaya),
                "total_all": format_currency_simple(totals.total_all),
            },
            "form": {
                "visible": self.form.visible,
                "editing": self.form.is_editing,
                "submitting": self.form.submitting,
                "total": format_currency(form_totals.total),
                "kembalian": format_currency(abs(form_totals.kembalian)),
                "kurang": form_totals.kembalian < 0,
                "error": self.form.last_error,
            },
            "error": self.last_error,
        }
