"""Typed async client for the Confluence REST API."""

from .confluence import (
    BearerAuth,
    Confluence,
    ConfluenceApiError,
    ConfluenceAuth,
    ConfluenceError,
    ConfluenceValidationError,
    UnexpectedStatusError,
    UnsupportedOperationError,
)
from .confluence.models import (
    Attachment,
    Body,
    BodyContent,
    Content,
    ContentType,
    CopyContent,
    CopyDestination,
    CursorBasedResult,
    Error,
    History,
    Label,
    PagingInformation,
    Position,
    Result,
    SearchDetails,
    Space,
    SystemInfo,
    User,
    Version,
)
from .query import Clause, Fields, FinalClause, Operators, Where

__version__ = "0.1.0"

__all__ = [
    "Attachment",
    "BearerAuth",
    "Body",
    "BodyContent",
    "Clause",
    "Confluence",
    "ConfluenceApiError",
    "ConfluenceAuth",
    "ConfluenceError",
    "ConfluenceValidationError",
    "Content",
    "ContentType",
    "CopyContent",
    "CopyDestination",
    "CursorBasedResult",
    "Error",
    "Fields",
    "FinalClause",
    "History",
    "Label",
    "Operators",
    "PagingInformation",
    "Position",
    "Result",
    "SearchDetails",
    "Space",
    "SystemInfo",
    "UnexpectedStatusError",
    "UnsupportedOperationError",
    "User",
    "Version",
    "Where",
]
