"""Tests for the paged result containers and entity mapping."""

from unittest import mock

import pytest
from pydantic import ValidationError

from confluence_rest.confluence import models
from confluence_rest.confluence.models import (
    Body,
    Content,
    ContentType,
    CursorBasedResult,
    Label,
    Result,
    SearchDetails,
)
from confluence_rest.query import Where


def _page(next_link=None, items=None):
    links = {"base": "https://example.atlassian.net/wiki", "context": "/wiki"}
    if next_link is not None:
        links["next"] = next_link
    results = items if items is not None else [{"id": "1", "title": "One"}, {"id": "2", "title": "Two"}]
    return {"results": results, "start": 0, "limit": 25, "size": len(results), "_links": links}


class TestResult:
    """Tests for Result."""

    def test_maps_results_and_window(self) -> None:
        result = Result[Content].model_validate(_page())

        assert [item.id for item in result.items] == [1, 2]
        assert result.start == 0
        assert result.limit == 25
        assert result.size == 2
        assert len(result) == 2
        assert [item.title for item in result] == ["One", "Two"]

    def test_has_next_follows_next_link(self) -> None:
        assert not Result[Content].model_validate(_page()).has_next
        assert Result[Content].model_validate(_page("/rest/api/content?start=25")).has_next

    def test_generic_over_labels(self) -> None:
        result = Result[Label].model_validate(_page(items=[{"prefix": "global", "name": "docs", "id": "7"}]))

        assert result.items[0].name == "docs"
        assert result.items[0].prefix == "global"

    def test_is_immutable(self) -> None:
        result = Result[Content].model_validate(_page())

        with pytest.raises(ValidationError):
            result.start = 5

    def test_round_trips_json_names(self) -> None:
        payload = _page("/rest/api/content?start=25")
        dumped = Result[Content].model_validate(payload).to_payload()

        assert dumped["results"][0]["id"] == 1
        assert dumped["_links"]["next"] == "/rest/api/content?start=25"
        assert dumped["size"] == 2


class TestCursorBasedResult:
    """Tests for cursor extraction on CursorBasedResult."""

    def test_no_next_link_means_no_cursor(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page())

        assert result.has_next is False
        assert result.cursor is None

    def test_no_next_link_never_parses(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page())

        with mock.patch.object(models, "cursor_from_link") as parse:
            assert result.cursor is None
        parse.assert_not_called()

    def test_cursor_taken_from_next_link(self) -> None:
        result = CursorBasedResult[Content].model_validate(
            _page("/rest/api/content/search?next=true&cursor=_f_MjU%3D_sa_WyJcdDQyIl0%3D&limit=25&cql=type%3Dpage")
        )

        assert result.has_next is True
        assert result.cursor == "_f_MjU=_sa_WyJcdDQyIl0="

    def test_cursor_is_memoized(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page("/rest/api/content/search?cursor=abc"))

        with mock.patch.object(models, "cursor_from_link", wraps=models.cursor_from_link) as parse:
            assert result.cursor == "abc"
            assert result.cursor == "abc"
        assert parse.call_count == 1

    def test_next_link_without_cursor_key(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page("/rest/api/content/search?start=25&limit=25"))

        assert result.has_next is True
        assert result.cursor is None

    def test_malformed_next_link_without_query(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page("/rest/api/content/search"))

        assert result.has_next is True
        assert result.cursor is None

    def test_cursor_is_not_serialized(self) -> None:
        result = CursorBasedResult[Content].model_validate(_page("/rest/api/content/search?cursor=abc"))
        assert result.cursor == "abc"

        assert "cursor" not in result.to_payload()


class TestEntities:
    """Tests for entity models."""

    def test_content_from_server_json(self, content_payload) -> None:
        content = Content.model_validate(content_payload)

        assert content.id == 42
        assert content.space.key == "SP"
        assert content.version.number == 3
        assert content.version.minor_edit is False
        assert content.body.storage.value == "<p>x</p>"
        assert content.links.webui == "/spaces/SP/pages/42/Home"

    def test_content_type_accepts_enum(self) -> None:
        content = Content(type=ContentType.BLOGPOST, title="News")

        assert content.type == "blogpost"
        assert content.to_payload() == {"type": "blogpost", "title": "News"}

    def test_body_from_storage(self) -> None:
        body = Body.from_storage("<p>x</p>")

        assert body.to_payload() == {"storage": {"value": "<p>x</p>", "representation": "storage"}}

    def test_search_details_accepts_clause(self) -> None:
        details = SearchDetails(cql=Where.space("SP"))

        assert details.cql == 'space = "SP"'
