from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from kas_dashboard.config import ClientConfig
from kas_dashboard.http_client import HttpClient
from kas_dashboard.models import AuthUser

BASE_URL = "https://api.example.com"


@dataclass
class _ScheduledCall:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler driven by an explicit clock; nothing runs until ``advance``."""

    now: float = 0.0
    calls: list[_ScheduledCall] = field(default_factory=list)

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> _ScheduledCall:
        call = _ScheduledCall(due=self.now + delay_seconds, callback=callback)
        self.calls.append(call)
        return call

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [call for call in self.calls if not call.cancelled and call.due <= target + 1e-9]
            if not due:
                break
            call = min(due, key=lambda item: item.due)
            self.calls.remove(call)
            self.now = call.due
            call.callback()
        self.now = target

    @property
    def pending(self) -> int:
        return sum(1 for call in self.calls if not call.cancelled)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, retries=0, retry_backoff_seconds=0)


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config=config, token_provider=lambda: "token-123", sleep=lambda _: None)


@pytest.fixture
def owner() -> AuthUser:
    return AuthUser(id=1, role="owner", username="boss")


@pytest.fixture
def kasir() -> AuthUser:
    return AuthUser(id=7, role="kasir", username="kasir7")
