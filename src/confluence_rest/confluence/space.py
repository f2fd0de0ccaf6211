"""Space operations."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from .client import ConfluenceClient, segments
from .errors import handle_response, handle_status, require
from .models import Content, ContentType, PagingInformation, Result, Space
from .paging import add_expand, add_paging


class SpaceMixin(ConfluenceClient):
    async def get_space(self, space_key: str, *, expand: Optional[Iterable[str]] = None) -> Space:
        require(space_key, "space_key")
        params = add_expand({}, expand, self.settings.expand.get_space)
        response = await self._request("GET", segments("space", space_key), params=params)
        return handle_response(response, Space)

    async def get_spaces(
        self,
        *,
        paging: Optional[PagingInformation] = None,
        space_keys: Optional[Iterable[str]] = None,
        expand: Optional[Iterable[str]] = None,
    ) -> Result[Space]:
        params = add_paging({}, paging)
        if space_keys:
            params["spaceKey"] = list(space_keys)
        add_expand(params, expand, self.settings.expand.get_spaces)
        response = await self._request("GET", "space", params=params)
        return handle_response(response, Result[Space])

    async def create_space(self, key: str, name: str, description: Optional[str] = None) -> Space:
        require(key, "key")
        require(name, "name")
        payload: dict[str, object] = {"key": key, "name": name}
        if description:
            payload["description"] = {"plain": {"value": description, "representation": "plain"}}
        response = await self._request("POST", "space", json=payload)
        return handle_response(response, Space)

    async def delete_space(self, space_key: str) -> None:
        """Delete a space; Confluence removes it in a background task."""

        require(space_key, "space_key")
        response = await self._request("DELETE", segments("space", space_key))
        handle_status(response, (202,))

    async def get_space_contents(
        self,
        space_key: str,
        content_type: Union[ContentType, str] = ContentType.PAGE,
        *,
        paging: Optional[PagingInformation] = None,
        expand: Optional[Iterable[str]] = None,
    ) -> Result[Content]:
        require(space_key, "space_key")
        content_type = ContentType(content_type)
        params = add_paging({}, paging)
        add_expand(params, expand, self.settings.expand.get_space_contents)
        response = await self._request(
            "GET", segments("space", space_key, "content", content_type.value), params=params
        )
        return handle_response(response, Result[Content])
