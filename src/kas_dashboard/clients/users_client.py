from __future__ import annotations

from dataclasses import dataclass

from ..models import ListPage, Role, UserSummary
from .base import BaseClient, parse_list


@dataclass
class UsersClient(BaseClient):
    def list_users(self) -> ListPage[UserSummary]:
        return parse_list(self._get("/user"), UserSummary)

    def list_cashiers(self) -> ListPage[UserSummary]:
        users = self.list_users()
        return ListPage[UserSummary](
            rows=[user for user in users.rows if user.role == Role.KASIR.value],
            pagination=None,
        )
