"""Exception hierarchy and response-to-result mapping for the Confluence client.

Every error raised by this package derives from :class:`ConfluenceError`.
Local argument checks raise :class:`ConfluenceValidationError` before any
request is sent. Non-success responses become :class:`ConfluenceApiError`
when the server sent a structured error body, and
:class:`UnexpectedStatusError` otherwise.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .models import Error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_SUCCESS = (200,)


class ConfluenceError(Exception):
    """Base exception for all Confluence client errors."""


class ConfluenceValidationError(ConfluenceError, ValueError):
    """Raised when a required argument is missing or empty."""

    def __init__(self, argument: str, message: Optional[str] = None):
        super().__init__(message or f"Argument '{argument}' is required")
        self.argument = argument


class UnsupportedOperationError(ConfluenceError):
    """Raised when the connected deployment cannot perform an operation."""

    def __init__(self, operation: str, message: Optional[str] = None):
        super().__init__(
            message
            or f"The content {operation} operation is not supported on Confluence server, "
            "you need Confluence cloud for this."
        )
        self.operation = operation


class ConfluenceApiError(ConfluenceError):
    """Raised for a non-success response carrying a structured error body."""

    def __init__(self, error: Error, status_code: int):
        self.error = error
        self.status_code = error.status_code or status_code
        self.message = error.message or ""
        self.reason = error.reason
        text = f"Confluence returned {self.status_code}"
        if self.message:
            text = f"{text}: {self.message}"
        super().__init__(text)


class UnexpectedStatusError(ConfluenceError):
    """Raised when a response status is outside the expected set and has no error body."""

    def __init__(self, status_code: int, expected: Iterable[int], body: str = ""):
        self.status_code = status_code
        self.expected = tuple(expected)
        self.body = body[:500]
        expected_text = ", ".join(str(code) for code in self.expected)
        super().__init__(f"Unexpected status {status_code} (expected {expected_text})")


def require(value: Any, argument: str) -> None:
    """Raise :class:`ConfluenceValidationError` when ``value`` is empty, ``None`` or ``0``."""

    if value is None or value == 0 or value == "":
        raise ConfluenceValidationError(argument)
    if isinstance(value, (list, tuple, set)) and not value:
        raise ConfluenceValidationError(argument)


def _parse_error(response: httpx.Response) -> Optional[Error]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict) or not (payload.get("message") or payload.get("statusCode")):
        return None
    try:
        return Error.model_validate(payload)
    except ValidationError:
        return None


def raise_for_response(response: httpx.Response, expected: Iterable[int]) -> None:
    """Translate a response outside ``expected`` into a typed exception."""

    expected = tuple(expected)
    if response.status_code in expected:
        return

    logger.warning(
        "%s %s returned %s", response.request.method, response.request.url.path, response.status_code
    )
    error = _parse_error(response)
    if error is not None:
        raise ConfluenceApiError(error, response.status_code)
    raise UnexpectedStatusError(response.status_code, expected, response.text)


def handle_status(response: httpx.Response, expected: Iterable[int] = DEFAULT_SUCCESS) -> None:
    """Check the status of a response that carries no result."""

    raise_for_response(response, expected)


def handle_response(
    response: httpx.Response,
    model: type[ModelT],
    expected: Iterable[int] = DEFAULT_SUCCESS,
) -> ModelT:
    """Check the status and deserialize the JSON body into ``model``."""

    raise_for_response(response, expected)
    return model.model_validate(response.json())
