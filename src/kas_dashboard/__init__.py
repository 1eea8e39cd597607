from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ResponseFormatError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    AuthUser,
    BalanceRecord,
    ChannelId,
    ChartPeriod,
    ChartSeriesPoint,
    FavoriteRecipient,
    ListPage,
    PaginationMeta,
    Role,
    SessionData,
    TransferPayload,
    TransferRecord,
    TransferStatus,
    UserSummary,
)
from .session import ApiSession
from .validation import ValidationIssue, ValidationResult, parse_nominal

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "AuthUser",
    "BalanceRecord",
    "ChannelId",
    "ChartPeriod",
    "ChartSeriesPoint",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "FavoriteRecipient",
    "HttpClient",
    "ListPage",
    "NotFoundError",
    "PaginationMeta",
    "PermissionError",
    "RateLimitError",
    "ResponseFormatError",
    "Role",
    "ServerError",
    "SessionData",
    "TransferPayload",
    "TransferRecord",
    "TransferStatus",
    "TransportError",
    "UserSummary",
    "ValidationError",
    "ValidationIssue",
    "ValidationResult",
    "load_config",
    "parse_nominal",
]
