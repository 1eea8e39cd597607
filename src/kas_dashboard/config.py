from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

PREFIX = "KAS_"

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True
    search_debounce_ms: int = 500
    transfer_page_limit: int = 10

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


def _env(name: str) -> str | None:
    value = os.getenv(PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, inclusive: bool = True) -> N:
    """Read ``KAS_<name>``; the value must be >= ``minimum`` (or > when not inclusive)."""
    raw = _env(name)
    if raw is None:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {PREFIX}{name}: expected {kind}, got {raw!r}") from exc
    in_range = value >= minimum if inclusive else value > minimum
    if not in_range:
        bound = ">=" if inclusive else ">"
        raise ConfigError(f"Invalid {PREFIX}{name}: expected {bound} {minimum}, got {value}")
    return value


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build a ``ClientConfig`` from ``KAS_*`` variables, after loading ``env_file`` (or a found .env)."""
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not api_base_url:
        raise ConfigError(f"Missing required config values: {PREFIX}API_BASE_URL")

    timeout = _number("TIMEOUT_SECONDS", 10.0, float, minimum=0.0, inclusive=False)
    connect_timeout = _number("CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float, minimum=0.0, inclusive=False)
    read_timeout = _number(
        "READ_TIMEOUT_SECONDS", max(timeout, connect_timeout), float, minimum=0.0, inclusive=False
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=_number("RETRIES", 3, int, minimum=0),
        retry_backoff_seconds=_number("RETRY_BACKOFF_SECONDS", 0.3, float, minimum=0.0),
        max_connections=_number("MAX_CONNECTIONS", 20, int, minimum=1),
        verify_ssl=_flag("VERIFY_SSL", True),
        search_debounce_ms=_number("SEARCH_DEBOUNCE_MS", 500, int, minimum=0),
        transfer_page_limit=_number("TRANSFER_PAGE_LIMIT", 10, int, minimum=1),
    )
