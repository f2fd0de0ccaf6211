"""Content operations: pages, blog posts, history, labels, search, move and copy."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Iterable, Optional, Union

from .client import segments
from .errors import ConfluenceValidationError, handle_response, handle_status, raise_for_response, require
from .models import (
    Body,
    Content,
    ContentType,
    CopyContent,
    CursorBasedResult,
    History,
    Label,
    PagingInformation,
    Position,
    Result,
    SearchDetails,
    Space,
)
from .paging import TITLE_LOOKUP_PAGING, add_expand, add_paging
from .server import ServerInfoMixin

logger = logging.getLogger(__name__)


class ContentMixin(ServerInfoMixin):
    # ------------------------------------------------------------------
    # Create / update / delete
    # ------------------------------------------------------------------
    async def create(
        self,
        content_type: Union[ContentType, str],
        title: str,
        space_key: str,
        body: Union[str, Body],
        ancestor_id: Optional[int] = None,
    ) -> Content:
        """Create a page or blog post.

        ``body`` is either the storage-format markup or a prepared :class:`Body`.
        """

        require(title, "title")
        require(space_key, "space_key")
        if isinstance(body, str):
            require(body, "body")
            body = Body.from_storage(body)
        elif body is None:
            raise ConfluenceValidationError("body")

        content = Content(
            type=content_type,
            title=title,
            space=Space(key=space_key),
            body=body,
            ancestors=[Content(id=ancestor_id)] if ancestor_id else None,
        )
        return await self.create_content(content)

    async def create_content(self, content: Content) -> Content:
        require(content, "content")
        response = await self._request("POST", "content", json=content.to_payload())
        return handle_response(response, Content)

    async def update(self, content: Content) -> Content:
        """Store ``content``; the caller sets the incremented ``version``."""

        require(content, "content")
        require(content.id, "content.id")
        response = await self._request("PUT", segments("content", content.id), json=content.to_payload())
        return handle_response(response, Content)

    async def delete(self, content_id: int, *, is_trashed: bool = False) -> None:
        """Delete content, attachments included.

        Trashable content moves to the trash first; call again with
        ``is_trashed=True`` to purge it.
        """

        require(content_id, "content_id")
        params = None
        if is_trashed:
            logger.debug("Purging trashed content %s", content_id)
            params = {"status": "trashed"}
        response = await self._request("DELETE", segments("content", content_id), params=params)
        handle_status(response, (200,) if is_trashed else (204,))

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    async def get(self, content_id: int, *, expand: Optional[Iterable[str]] = None) -> Content:
        require(content_id, "content_id")
        params = add_expand({}, expand, self.settings.expand.get_content)
        response = await self._request("GET", segments("content", content_id), params=params)
        return handle_response(response, Content)

    async def get_by_title(
        self,
        space_key: str,
        title: str,
        *,
        paging: Optional[PagingInformation] = None,
    ) -> Result[Content]:
        require(title, "title")
        require(space_key, "space_key")
        paging = paging or TITLE_LOOKUP_PAGING
        params: dict[str, object] = {
            "start": paging.start,
            "limit": paging.limit,
            "type": ContentType.PAGE.value,
            "spaceKey": space_key,
            "title": title,
        }
        params = {key: value for key, value in params.items() if value is not None}
        add_expand(params, None, self.settings.expand.get_content_by_title)
        response = await self._request("GET", "content", params=params)
        return handle_response(response, Result[Content])

    async def get_children(
        self,
        content_id: int,
        *,
        paging: Optional[PagingInformation] = None,
        parent_version: Optional[int] = None,
    ) -> Result[Content]:
        require(content_id, "content_id")
        params = add_paging({}, paging)
        if parent_version is not None:
            params["parentVersion"] = parent_version
        add_expand(params, None, self.settings.expand.get_children)
        response = await self._request(
            "GET", segments("content", content_id, "child", "page"), params=params
        )
        return handle_response(response, Result[Content])

    async def iter_children(self, content_id: int, *, limit: Optional[int] = None) -> AsyncIterator[Content]:
        """Yield every child page, requesting one window at a time."""

        paging = PagingInformation(limit=limit)
        while True:
            result = await self.get_children(content_id, paging=paging)
            for child in result.items:
                yield child
            if not result.has_next or not result.items:
                return
            paging = PagingInformation(start=result.start + len(result.items), limit=limit)

    async def get_history(self, content_id: int) -> History:
        require(content_id, "content_id")
        response = await self._request("GET", segments("content", content_id, "history"))
        return handle_response(response, History)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    async def search(
        self,
        cql: object,
        *,
        cql_context: Optional[str] = None,
        cursor: Optional[str] = None,
        paging: Optional[PagingInformation] = None,
        expand: Optional[Iterable[str]] = None,
    ) -> CursorBasedResult[Content]:
        """Search with CQL; ``cql`` is a query string or a clause from :mod:`confluence_rest.query`."""

        if cql is None or not str(cql):
            raise ConfluenceValidationError("cql")
        details = SearchDetails(
            cql=cql,
            cql_context=cql_context,
            cursor=cursor,
            start=paging.start if paging else None,
            limit=paging.limit if paging else None,
            expand_search=list(expand) if expand is not None else None,
        )
        return await self.search_with_details(details)

    async def search_with_details(self, details: SearchDetails) -> CursorBasedResult[Content]:
        require(details, "details")
        params: dict[str, object] = {"cql": details.cql}
        add_paging(params, PagingInformation(start=details.start, limit=details.limit), cursor=details.cursor)
        add_expand(params, details.expand_search, self.settings.expand.search)
        if details.cql_context is not None:
            params["cqlcontext"] = details.cql_context

        response = await self._request("GET", "content/search", params=params)
        return handle_response(response, CursorBasedResult[Content])

    async def iter_search(
        self,
        cql: object,
        *,
        cql_context: Optional[str] = None,
        limit: Optional[int] = None,
        expand: Optional[Iterable[str]] = None,
    ) -> AsyncIterator[Content]:
        """Yield every search hit, continuing with the cursor of each page.

        Servers that answer without a cursor are continued by offset.
        """

        expand = list(expand) if expand is not None else None
        paging = PagingInformation(limit=limit)
        cursor: Optional[str] = None
        while True:
            result = await self.search(
                cql, cql_context=cql_context, cursor=cursor, paging=paging, expand=expand
            )
            for item in result.items:
                yield item
            if not result.has_next or not result.items:
                return
            cursor = result.cursor
            if cursor is None:
                paging = PagingInformation(start=result.start + len(result.items), limit=limit)

    # ------------------------------------------------------------------
    # Cloud only
    # ------------------------------------------------------------------
    async def move(
        self,
        content_id: int,
        position: Union[Position, str],
        target_content_id: int,
    ) -> str:
        """Move content relative to ``target_content_id``; returns the moved page id."""

        require(content_id, "content_id")
        require(target_content_id, "target_content_id")
        try:
            position = Position(position)
        except ValueError as exc:
            raise ConfluenceValidationError("position", f"Unknown position {position!r}") from exc
        await self._require_cloud("move")

        response = await self._request(
            "PUT", segments("content", content_id, "move", position.value, target_content_id)
        )
        raise_for_response(response, (200,))
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("pageId"):
            return str(payload["pageId"])
        return str(content_id)

    async def copy(
        self,
        content_id: int,
        copy_content: CopyContent,
        *,
        expand: Optional[Iterable[str]] = None,
    ) -> Content:
        require(content_id, "content_id")
        require(copy_content, "copy_content")
        await self._require_cloud("copy")

        params = add_expand({}, expand)
        response = await self._request(
            "POST", segments("content", content_id, "copy"), params=params, json=copy_content.to_payload()
        )
        return handle_response(response, Content)

    # ------------------------------------------------------------------
    # Labels
    # ------------------------------------------------------------------
    async def get_labels(self, content_id: int) -> Result[Label]:
        require(content_id, "content_id")
        response = await self._request("GET", segments("content", content_id, "label"))
        return handle_response(response, Result[Label])

    async def add_labels(self, content_id: int, labels: Iterable[Union[Label, str]]) -> None:
        require(content_id, "content_id")
        if labels is None:
            raise ConfluenceValidationError("labels")
        if isinstance(labels, (str, Label)):
            labels = [labels]
        labels = [Label(name=label) if isinstance(label, str) else label for label in labels]
        require(labels, "labels")
        response = await self._request(
            "POST",
            segments("content", content_id, "label"),
            json=[label.to_payload() for label in labels],
        )
        handle_status(response)

    async def delete_label(self, content_id: int, label: str) -> None:
        require(content_id, "content_id")
        require(label, "label")
        response = await self._request("DELETE", segments("content", content_id, "label", label))
        handle_status(response, (204,))
