"""Async Confluence REST client.

:class:`Confluence` bundles every domain mixin on top of the shared
:class:`~confluence_rest.confluence.client.ConfluenceClient` transport.
"""

from .attachment import AttachmentMixin
from .client import BearerAuth, ConfluenceAuth, ConfluenceClient
from .content import ContentMixin
from .errors import (
    ConfluenceApiError,
    ConfluenceError,
    ConfluenceValidationError,
    UnexpectedStatusError,
    UnsupportedOperationError,
)
from .space import SpaceMixin
from .user import UserMixin


class Confluence(ContentMixin, SpaceMixin, UserMixin, AttachmentMixin):
    """Client exposing content, space, user and attachment operations."""


__all__ = [
    "BearerAuth",
    "Confluence",
    "ConfluenceApiError",
    "ConfluenceAuth",
    "ConfluenceClient",
    "ConfluenceError",
    "ConfluenceValidationError",
    "UnexpectedStatusError",
    "UnsupportedOperationError",
]
