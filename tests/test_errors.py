"""Tests for mapping responses to results and errors."""

import httpx
import pytest

from conftest import json_response
from confluence_rest.confluence.errors import (
    ConfluenceApiError,
    ConfluenceError,
    ConfluenceValidationError,
    UnexpectedStatusError,
    handle_response,
    handle_status,
    require,
)
from confluence_rest.confluence.models import Content


def _response(status_code: int, **kwargs) -> httpx.Response:
    response = httpx.Response(status_code, **kwargs)
    response.request = httpx.Request("GET", "https://example.atlassian.net/wiki/rest/api/content/42")
    return response


class TestHandleResponse:
    """Tests for handle_response and handle_status."""

    def test_success_is_deserialized(self) -> None:
        content = handle_response(_response(200, json={"id": "42", "title": "Home"}), Content)

        assert content.id == 42
        assert content.title == "Home"

    def test_structured_error_body(self) -> None:
        body = {
            "statusCode": 404,
            "data": {"authorized": False, "valid": True},
            "message": "No content found with id: ContentId{id=42}",
            "reason": "Not Found",
        }

        with pytest.raises(ConfluenceApiError) as excinfo:
            handle_response(_response(404, json=body), Content)

        error = excinfo.value
        assert error.status_code == 404
        assert error.message == "No content found with id: ContentId{id=42}"
        assert error.reason == "Not Found"
        assert error.error.data == {"authorized": False, "valid": True}
        assert isinstance(error, ConfluenceError)

    @pytest.mark.parametrize(
        "body, text",
        [
            ({"statusCode": 400, "message": "Bad input:"}, "Confluence returned 400: Bad input:"),
            ({"statusCode": 400, "message": ""}, "Confluence returned 400"),
        ],
    )
    def test_api_error_message_kept_verbatim(self, body, text) -> None:
        with pytest.raises(ConfluenceApiError) as excinfo:
            handle_status(_response(400, json=body))

        assert str(excinfo.value) == text

    def test_unexpected_status_without_error_body(self) -> None:
        with pytest.raises(UnexpectedStatusError) as excinfo:
            handle_status(_response(502, text="<html>Bad gateway</html>"), (204,))

        assert excinfo.value.status_code == 502
        assert excinfo.value.expected == (204,)
        assert "Bad gateway" in excinfo.value.body

    def test_success_status_outside_expected_set(self) -> None:
        with pytest.raises(UnexpectedStatusError):
            handle_status(_response(200), (204,))

    def test_expected_status_passes(self) -> None:
        handle_status(_response(204), (204,))
        handle_status(_response(200))

    def test_json_without_error_fields_is_unexpected(self) -> None:
        with pytest.raises(UnexpectedStatusError):
            handle_status(_response(500, json={"foo": "bar"}))


class TestRequire:
    """Tests for local argument validation."""

    @pytest.mark.parametrize("value", [None, "", 0, [], ()])
    def test_empty_values_rejected(self, value) -> None:
        with pytest.raises(ConfluenceValidationError) as excinfo:
            require(value, "argument")

        assert excinfo.value.argument == "argument"
        assert isinstance(excinfo.value, ValueError)

    @pytest.mark.parametrize("value", ["x", 1, ["a"], Content(title="x")])
    def test_present_values_pass(self, value) -> None:
        require(value, "argument")


class TestClientErrorMapping:
    """Tests for error mapping through the client."""

    @pytest.mark.asyncio
    async def test_get_raises_api_error(self, make_client) -> None:
        client, _ = make_client(
            lambda request: json_response(403, {"statusCode": 403, "message": "Not permitted"})
        )

        with pytest.raises(ConfluenceApiError) as excinfo:
            await client.get(42)

        assert excinfo.value.status_code == 403
        assert str(excinfo.value) == "Confluence returned 403: Not permitted"
