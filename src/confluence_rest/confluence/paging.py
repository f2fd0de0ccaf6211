"""Query parameter composition shared by every listing and search call."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import PagingInformation

Params = dict[str, object]

TITLE_LOOKUP_PAGING = PagingInformation(start=0, limit=200)


def join_expand(
    explicit: Optional[Iterable[str]],
    default: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """Return the comma separated expand value, or ``None`` when there is nothing to send.

    An explicit list wins over the configured default, even when it is empty.
    """

    fields = explicit if explicit is not None else default
    joined = ",".join(fields or ())
    return joined or None


def add_expand(
    params: Params,
    explicit: Optional[Iterable[str]],
    default: Optional[Iterable[str]] = None,
) -> Params:
    expand = join_expand(explicit, default)
    if expand:
        params["expand"] = expand
    return params


def add_paging(
    params: Params,
    paging: Optional[PagingInformation],
    *,
    cursor: Optional[str] = None,
) -> Params:
    """Attach the paging window to ``params``.

    A cursor continues a previous result: it is sent together with
    ``next=true`` and ``start`` is left out. Without a cursor only the
    fields that were explicitly set are sent.
    """

    paging = paging or PagingInformation()
    if paging.start is not None and not cursor:
        params["start"] = paging.start
    if paging.limit is not None:
        params["limit"] = paging.limit
    if cursor:
        params["cursor"] = cursor
        params["next"] = "true"
    return params
