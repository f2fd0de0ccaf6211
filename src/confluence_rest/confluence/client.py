"""Async HTTP client wrapper for the Confluence REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generator, Optional, Union
from urllib.parse import quote, urljoin

import httpx

from ..config import ClientSettings, ConfluenceConfig


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConfluenceAuth:
    """Basic authentication payload: user name (or account email) and API token."""

    username: str
    api_token: str


class BearerAuth(httpx.Auth):
    """Send a personal access token as ``Authorization: Bearer``."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


AuthTypes = Union[ConfluenceAuth, httpx.Auth, None]


def segments(*parts: Any) -> str:
    """Join path segments, escaping each one."""

    return "/".join(quote(str(part), safe="") for part in parts)


class ConfluenceClient:
    """Thin async wrapper above the Confluence REST API.

    Holds the API root (``<base_url>/rest/api/``), the authentication and
    the per-client settings. Domain operations live in the mixins that
    extend this class.
    """

    def __init__(
        self,
        *,
        base_url: str,
        auth: AuthTypes = None,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.base_url = base_url.rstrip("/")
        self.api_uri = urljoin(self.base_url + "/", "rest/api/")
        if isinstance(auth, ConfluenceAuth):
            auth = httpx.BasicAuth(auth.username, auth.api_token)
        self._deployment: Optional[str] = self.settings.deployment
        self._client = httpx.AsyncClient(
            base_url=self.api_uri,
            auth=auth,
            timeout=self.settings.timeout,
            headers={"Accept": "application/json", "User-Agent": self.settings.user_agent},
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ConfluenceConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        credentials = config.credentials
        if credentials.bearer_token:
            auth: AuthTypes = BearerAuth(credentials.bearer_token)
        else:
            auth = ConfluenceAuth(username=credentials.username, api_token=credentials.api_token)
        return cls(
            base_url=str(credentials.base_url),
            auth=auth,
            settings=config.client,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: D401 - standard context manager signature
        await self.aclose()

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------
    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, object]] = None,
        json: Any = None,
        **kwargs: Any,
    ) -> httpx.Response:
        logger.debug("%s %s %s", method, url, params or "")
        return await self._client.request(method, url, params=params, json=json, **kwargs)
