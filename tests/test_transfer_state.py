from __future__ import annotations

from kas_dashboard.transfer_state import transfer_action_availability
from kas_dashboard.view_state import ViewStateStatus, resolve_state


def test_only_pending_can_be_marked_lunas() -> None:
    assert transfer_action_availability("pending").can_mark_lunas is True
    assert transfer_action_availability("Pending").can_mark_lunas is True
    assert transfer_action_availability("lunas").can_mark_lunas is False
    assert transfer_action_availability(None).can_mark_lunas is False


def test_edit_and_receipt_always_available_unless_busy() -> None:
    idle = transfer_action_availability("lunas")
    assert idle.can_edit and idle.can_print_receipt
    busy = transfer_action_availability("pending", busy=True)
    assert not (busy.can_mark_lunas or busy.can_edit or busy.can_print_receipt)


def test_resolve_state() -> None:
    assert resolve_state(is_loading=True, error=None, has_data=False).status is ViewStateStatus.LOADING
    assert resolve_state(is_loading=False, error="x", has_data=True).status is ViewStateStatus.PARTIAL_ERROR
    assert resolve_state(is_loading=False, error="x", has_data=False).status is ViewStateStatus.FATAL_ERROR
    empty = resolve_state(is_loading=False, error=None, has_data=False, empty_message="Belum ada data transfer")
    assert empty.render()["message"] == "Belum ada data transfer"
    assert resolve_state(is_loading=False, error=None, has_data=True).status is ViewStateStatus.SUCCESS
