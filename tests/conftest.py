"""Shared fixtures: a Confluence client wired to a recording mock transport."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from confluence_rest.config import ClientSettings, ExpandDefaults
from confluence_rest.confluence import Confluence, ConfluenceAuth

BASE_URL = "https://example.atlassian.net/wiki"
API_ROOT = BASE_URL + "/rest/api/"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(status_code: int = 200, payload: Any = None) -> httpx.Response:
    return httpx.Response(status_code, json=payload if payload is not None else {})


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


def relative_path(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/wiki/rest/api/")


@pytest.fixture
def make_client():
    """Build a client whose requests are answered by ``handler``.

    Expand defaults are switched off unless ``expand`` is given so that the
    query parameters in assertions only contain what the call itself adds.
    """

    def _make(
        handler: Callable[[httpx.Request], Any],
        *,
        deployment: Optional[str] = "cloud",
        expand: Optional[ExpandDefaults] = None,
    ) -> tuple[Confluence, RecordingTransport]:
        transport = RecordingTransport(handler)
        settings = ClientSettings(deployment=deployment, expand=expand or ExpandDefaults.none())
        client = Confluence(
            base_url=BASE_URL,
            auth=ConfluenceAuth(username="user@example.com", api_token="secret"),
            settings=settings,
            transport=transport,
        )
        return client, transport

    return _make


@pytest.fixture
def content_payload() -> dict:
    return {
        "id": "42",
        "type": "page",
        "status": "current",
        "title": "Home",
        "space": {"key": "SP", "name": "Space"},
        "version": {"number": 3, "when": "2024-01-02T10:00:00.000Z", "minorEdit": False},
        "body": {"storage": {"value": "<p>x</p>", "representation": "storage"}},
        "_links": {"webui": "/spaces/SP/pages/42/Home"},
    }
