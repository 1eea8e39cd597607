from __future__ import annotations

from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.modal_client import ModalClient
from .clients.transfer_client import TransferClient
from .clients.users_client import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import AuthUser, SessionData


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    token: str | None = None
    user: AuthUser | None = None
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.user = stored.user
        if self.http is None:
            self.http = HttpClient(config=self.config, token_provider=lambda: self.token)

    def modal_client(self) -> ModalClient:
        return ModalClient(http=self.http)

    def transfer_client(self) -> TransferClient:
        return TransferClient(http=self.http)

    def users_client(self) -> UsersClient:
        return UsersClient(http=self.http)

    def establish(self, token: str | None, user: AuthUser) -> None:
        self.token = token
        self.user = user
        self.auth_store.save(SessionData(access_token=token, user=user, env_name=self.config.env_name))

    def require_user(self) -> AuthUser:
        if self.user is None:
            raise RuntimeError("No authenticated user in session")
        return self.user

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
