"""Typed models for Confluence REST payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from functools import cached_property
from typing import Any, Generic, Iterator, Optional, TypeVar
from urllib.parse import parse_qs

from pydantic import BaseModel, ConfigDict, Field, field_validator


T = TypeVar("T")


class ContentType(str, Enum):
    """Content types known to the content endpoints."""

    PAGE = "page"
    BLOGPOST = "blogpost"
    ATTACHMENT = "attachment"
    COMMENT = "comment"


class Position(str, Enum):
    """Where a moved page ends up relative to its target."""

    BEFORE = "before"
    AFTER = "after"
    APPEND = "append"


class ConfluenceModel(BaseModel):
    """Base for every payload: JSON aliases in, aliases out, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Links(ConfluenceModel):
    next: Optional[str] = None
    base: Optional[str] = None
    context: Optional[str] = None
    self_link: Optional[str] = Field(None, alias="self")
    download: Optional[str] = None
    webui: Optional[str] = None


class User(ConfluenceModel):
    type: Optional[str] = None
    account_id: Optional[str] = Field(None, alias="accountId")
    username: Optional[str] = None
    user_key: Optional[str] = Field(None, alias="userKey")
    display_name: Optional[str] = Field(None, alias="displayName")
    public_name: Optional[str] = Field(None, alias="publicName")
    email: Optional[str] = None


class Version(ConfluenceModel):
    number: Optional[int] = None
    when: Optional[datetime] = None
    message: Optional[str] = None
    minor_edit: Optional[bool] = Field(None, alias="minorEdit")
    by: Optional[User] = None


class History(ConfluenceModel):
    latest: Optional[bool] = None
    created_by: Optional[User] = Field(None, alias="createdBy")
    created_date: Optional[datetime] = Field(None, alias="createdDate")
    last_updated: Optional[Version] = Field(None, alias="lastUpdated")
    previous_version: Optional[Version] = Field(None, alias="previousVersion")
    next_version: Optional[Version] = Field(None, alias="nextVersion")


class BodyContent(ConfluenceModel):
    value: str = ""
    representation: str = "storage"


class Body(ConfluenceModel):
    storage: Optional[BodyContent] = None
    view: Optional[BodyContent] = None
    export_view: Optional[BodyContent] = None

    @classmethod
    def from_storage(cls, value: str) -> "Body":
        return cls(storage=BodyContent(value=value, representation="storage"))


class Label(ConfluenceModel):
    id: Optional[str] = None
    prefix: str = "global"
    name: str
    label: Optional[str] = None


class SpaceDescription(ConfluenceModel):
    plain: Optional[BodyContent] = None


class Space(ConfluenceModel):
    id: Optional[int] = None
    key: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    description: Optional[SpaceDescription] = None
    links: Optional[Links] = Field(None, alias="_links")


class Content(ConfluenceModel):
    """A page, blog post, comment or attachment."""

    id: Optional[int] = None
    type: Optional[str] = None
    status: Optional[str] = None
    title: Optional[str] = None
    space: Optional[Space] = None
    history: Optional[History] = None
    version: Optional[Version] = None
    ancestors: Optional[list[Content]] = None
    body: Optional[Body] = None
    metadata: Optional[dict[str, Any]] = None
    extensions: Optional[dict[str, Any]] = None
    links: Optional[Links] = Field(None, alias="_links")

    @field_validator("type", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class Attachment(ConfluenceModel):
    """Attachment content; ids carry an ``att`` prefix so they stay strings."""

    id: Optional[str] = None
    type: str = "attachment"
    status: Optional[str] = None
    title: Optional[str] = None
    version: Optional[Version] = None
    container: Optional[Content] = None
    metadata: Optional[dict[str, Any]] = None
    extensions: Optional[dict[str, Any]] = None
    links: Optional[Links] = Field(None, alias="_links")

    @property
    def media_type(self) -> Optional[str]:
        return (self.extensions or {}).get("mediaType")

    @property
    def file_size(self) -> Optional[int]:
        return (self.extensions or {}).get("fileSize")

    @property
    def download_link(self) -> Optional[str]:
        return self.links.download if self.links else None


class CopyDestination(ConfluenceModel):
    """Target of a copy: ``space``, ``existing_page`` or ``parent_page``."""

    type: str
    value: str


class CopyContent(ConfluenceModel):
    destination: CopyDestination
    copy_attachments: bool = Field(False, alias="copyAttachments")
    copy_permissions: bool = Field(False, alias="copyPermissions")
    copy_properties: bool = Field(False, alias="copyProperties")
    copy_labels: bool = Field(False, alias="copyLabels")
    copy_custom_contents: bool = Field(False, alias="copyCustomContents")
    page_title: Optional[str] = Field(None, alias="pageTitle")
    body: Optional[Body] = None


class SystemInfo(ConfluenceModel):
    cloud_id: Optional[str] = Field(None, alias="cloudId")
    commit_hash: Optional[str] = Field(None, alias="commitHash")
    base_url: Optional[str] = Field(None, alias="baseUrl")
    edition: Optional[str] = None
    site_title: Optional[str] = Field(None, alias="siteTitle")
    default_locale: Optional[str] = Field(None, alias="defaultLocale")
    default_time_zone: Optional[str] = Field(None, alias="defaultTimeZone")
    deployment_type: Optional[str] = Field(None, alias="deploymentType")


class Error(ConfluenceModel):
    """Structured error body returned on non-success responses."""

    status_code: Optional[int] = Field(None, alias="statusCode")
    message: Optional[str] = None
    reason: Optional[str] = None
    data: Optional[dict[str, Any]] = None


# ----------------------------------------------------------------------
# Paging
# ----------------------------------------------------------------------
class PagingInformation(ConfluenceModel):
    """Requested result window; unset fields leave the server default in place."""

    start: Optional[int] = None
    limit: Optional[int] = None


class SearchDetails(ConfluenceModel):
    """Everything needed for a CQL search.

    ``cql`` accepts a plain string or any clause object whose ``str()`` is
    the query text. A ``cursor`` supersedes ``start``.
    """

    cql: str
    cql_context: Optional[str] = None
    cursor: Optional[str] = None
    start: Optional[int] = None
    limit: Optional[int] = None
    expand_search: Optional[list[str]] = None

    @field_validator("cql", mode="before")
    @classmethod
    def _clause_to_text(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            return str(value)
        return value


class Result(ConfluenceModel, Generic[T]):
    """One page of results from a listing endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    items: list[T] = Field(default_factory=list, alias="results")
    start: int = 0
    limit: int = 0
    size: int = 0
    links: Links = Field(default_factory=Links, alias="_links")

    @property
    def has_next(self) -> bool:
        return self.links.next is not None

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def cursor_from_link(link: str) -> Optional[str]:
    """Return the ``cursor`` query value of ``link`` or ``None``."""

    marker = link.find("?")
    if marker < 0:
        return None
    values = parse_qs(link[marker + 1 :]).get("cursor")
    return values[0] if values else None


class CursorBasedResult(Result[T], Generic[T]):
    """A result page that continues through a cursor taken from ``_links.next``."""

    @cached_property
    def cursor(self) -> Optional[str]:
        if not self.has_next:
            return None
        return cursor_from_link(self.links.next)



