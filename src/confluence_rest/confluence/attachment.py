"""Attachment operations.

Attachments are content hanging off a page. Uploads are multipart requests
and need the ``X-Atlassian-Token: nocheck`` header to pass the XSRF check.
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Optional, Union

from .client import ConfluenceClient, segments
from .errors import ConfluenceValidationError, handle_response, handle_status, raise_for_response, require
from .models import Attachment, PagingInformation, Result
from .paging import add_expand, add_paging

NO_CHECK_HEADERS = {"X-Atlassian-Token": "nocheck"}

FileContent = Union[bytes, BinaryIO]


class AttachmentMixin(ConfluenceClient):
    async def get_attachments(
        self,
        content_id: int,
        *,
        paging: Optional[PagingInformation] = None,
        expand: Optional[Iterable[str]] = None,
    ) -> Result[Attachment]:
        require(content_id, "content_id")
        params = add_paging({}, paging)
        add_expand(params, expand, self.settings.expand.get_attachments)
        response = await self._request(
            "GET", segments("content", content_id, "child", "attachment"), params=params
        )
        return handle_response(response, Result[Attachment])

    async def attach(
        self,
        content_id: int,
        content: FileContent,
        filename: str,
        *,
        media_type: str = "application/octet-stream",
        comment: Optional[str] = None,
    ) -> Result[Attachment]:
        """Upload a file to ``content_id``."""

        require(content_id, "content_id")
        require(filename, "filename")
        if content is None:
            raise ConfluenceValidationError("content")
        response = await self._request(
            "POST",
            segments("content", content_id, "child", "attachment"),
            files={"file": (filename, content, media_type)},
            data={"comment": comment} if comment else None,
            headers=NO_CHECK_HEADERS,
        )
        return handle_response(response, Result[Attachment])

    async def update_attachment_data(
        self,
        content_id: int,
        attachment_id: str,
        content: FileContent,
        filename: str,
        *,
        media_type: str = "application/octet-stream",
        comment: Optional[str] = None,
    ) -> Attachment:
        """Replace the binary data of an existing attachment, creating a new version."""

        require(content_id, "content_id")
        require(attachment_id, "attachment_id")
        require(filename, "filename")
        if content is None:
            raise ConfluenceValidationError("content")
        response = await self._request(
            "POST",
            segments("content", content_id, "child", "attachment", attachment_id, "data"),
            files={"file": (filename, content, media_type)},
            data={"comment": comment} if comment else None,
            headers=NO_CHECK_HEADERS,
        )
        return handle_response(response, Attachment)

    async def get_attachment_content(self, attachment: Attachment) -> bytes:
        require(attachment, "attachment")
        link = attachment.download_link
        if not link:
            raise ConfluenceValidationError("attachment", "Attachment has no download link")
        url = link if link.startswith(("http://", "https://")) else self.base_url + link
        response = await self._request("GET", url)
        raise_for_response(response, (200,))
        return response.content

    async def delete_attachment(self, attachment_id: str) -> None:
        require(attachment_id, "attachment_id")
        response = await self._request("DELETE", segments("content", attachment_id))
        handle_status(response, (204,))
