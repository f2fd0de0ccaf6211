"""Small builder for Confluence Query Language (CQL) expressions.

Clauses render to CQL text through ``str()``; the client never looks inside
them. A :class:`Clause` can be combined with ``and_`` / ``or_``; calling one
of the ``order_by`` methods turns it into a :class:`FinalClause` that can
only be ordered further.

    >>> str(Where.space("DEV").and_(Where.type(ContentType.PAGE)).order_by_descending(Fields.CREATED))
    'space = "DEV" and type = "page" order by created desc'
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterable, Union

from .confluence.models import ContentType

Value = Union[str, int, date, datetime, Enum]


class Fields(str, Enum):
    ANCESTOR = "ancestor"
    CONTENT = "content"
    CONTRIBUTOR = "contributor"
    CREATED = "created"
    CREATOR = "creator"
    FAVOURITE = "favourite"
    ID = "id"
    LABEL = "label"
    LAST_MODIFIED = "lastmodified"
    MENTION = "mention"
    PARENT = "parent"
    SPACE = "space"
    TEXT = "text"
    TITLE = "title"
    TYPE = "type"
    WATCHER = "watcher"


class Operators(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "!="
    CONTAINS = "~"
    NOT_CONTAINS = "!~"
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    IN = "in"
    NOT_IN = "not in"


def quote_value(value: Value) -> str:
    """Render a single CQL value; strings are double quoted with escapes."""

    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime):
        value = value.strftime("%Y-%m-%d %H:%M")
    elif isinstance(value, date):
        value = value.strftime("%Y-%m-%d")
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class FinalClause:
    """A clause that can only be ordered; ``str()`` gives the CQL text."""

    def __init__(self, expression: str, order: tuple[str, ...] = ()) -> None:
        self._expression = expression
        self._order = order

    def _ordered(self, term: str) -> "FinalClause":
        return FinalClause(self._expression, self._order + (term,))

    def order_by(self, field: Fields) -> "FinalClause":
        return self._ordered(Fields(field).value)

    def order_by_ascending(self, field: Fields) -> "FinalClause":
        return self._ordered(f"{Fields(field).value} asc")

    def order_by_descending(self, field: Fields) -> "FinalClause":
        return self._ordered(f"{Fields(field).value} desc")

    def __str__(self) -> str:
        if not self._order:
            return self._expression
        return f"{self._expression} order by {', '.join(self._order)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Clause(FinalClause):
    """A boolean CQL expression that can still be combined."""

    def __init__(self, expression: str) -> None:
        super().__init__(expression)

    def and_(self, *others: "Clause") -> "Clause":
        return Clause(" and ".join(str(clause) for clause in (self, *others)))

    def or_(self, *others: "Clause") -> "Clause":
        return Clause("(" + " or ".join(str(clause) for clause in (self, *others)) + ")")

    def not_(self) -> "Clause":
        return Clause(f"not ({self})")


class Where:
    """Entry points for building clauses."""

    @staticmethod
    def field(field: Fields, operator: Operators, value: Union[Value, Iterable[Value]]) -> Clause:
        operator = Operators(operator)
        if operator in (Operators.IN, Operators.NOT_IN):
            if isinstance(value, (str, int, date, Enum)):
                value = [value]
            rendered = "(" + ", ".join(quote_value(item) for item in value) + ")"
        else:
            rendered = quote_value(value)
        return Clause(f"{Fields(field).value} {operator.value} {rendered}")

    @staticmethod
    def _is_or_in(field: Fields, values: tuple[Value, ...]) -> Clause:
        if not values:
            raise ValueError(f"At least one value is required for {Fields(field).value}")
        if len(values) == 1:
            return Where.field(field, Operators.EQUALS, values[0])
        return Where.field(field, Operators.IN, values)

    @staticmethod
    def space(*keys: str) -> Clause:
        return Where._is_or_in(Fields.SPACE, keys)

    @staticmethod
    def type(*content_types: Union[ContentType, str]) -> Clause:
        return Where._is_or_in(Fields.TYPE, content_types)

    @staticmethod
    def id(*content_ids: int) -> Clause:
        return Where._is_or_in(Fields.ID, content_ids)

    @staticmethod
    def label(*labels: str) -> Clause:
        return Where._is_or_in(Fields.LABEL, labels)

    @staticmethod
    def title(title: str, *, contains: bool = False) -> Clause:
        operator = Operators.CONTAINS if contains else Operators.EQUALS
        return Where.field(Fields.TITLE, operator, title)

    @staticmethod
    def text(text: str) -> Clause:
        return Where.field(Fields.TEXT, Operators.CONTAINS, text)

    @staticmethod
    def ancestor(content_id: int) -> Clause:
        return Where.field(Fields.ANCESTOR, Operators.EQUALS, content_id)

    @staticmethod
    def parent(content_id: int) -> Clause:
        return Where.field(Fields.PARENT, Operators.EQUALS, content_id)

    @staticmethod
    def creator(user: str) -> Clause:
        return Where.field(Fields.CREATOR, Operators.EQUALS, user)

    @staticmethod
    def created(operator: Operators, when: Union[date, str]) -> Clause:
        return Where.field(Fields.CREATED, operator, when)

    @staticmethod
    def last_modified(operator: Operators, when: Union[date, str]) -> Clause:
        return Where.field(Fields.LAST_MODIFIED, operator, when)
