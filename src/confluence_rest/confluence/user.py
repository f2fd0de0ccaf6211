"""User lookups."""

from __future__ import annotations

from typing import Iterable, Optional

from .client import ConfluenceClient
from .errors import handle_response, require
from .models import User
from .paging import add_expand


class UserMixin(ConfluenceClient):
    async def get_current_user(self, *, expand: Optional[Iterable[str]] = None) -> User:
        params = add_expand({}, expand, self.settings.expand.get_user)
        response = await self._request("GET", "user/current", params=params)
        return handle_response(response, User)

    async def get_user(self, account_id: str, *, expand: Optional[Iterable[str]] = None) -> User:
        require(account_id, "account_id")
        params = add_expand({"accountId": account_id}, expand, self.settings.expand.get_user)
        response = await self._request("GET", "user", params=params)
        return handle_response(response, User)
