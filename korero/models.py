"""Pydantic models shared by the HTTP helpers.

Provides the HTTP method enumeration and an ordered container for
query-string parameters.
"""

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Method(str, Enum):
    """HTTP methods supported by the request builder."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: "str | Method") -> "Method":
        """Parse a method name case-insensitively."""
        if isinstance(value, Method):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {value!r}") from None


def render_param(value: Any) -> str:
    """Render a single query value the way a query string expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class QueryParams(BaseModel):
    """Ordered key/value pairs appended to a request URL.

    Keys may repeat; order is preserved exactly as added.
    """

    params: list[tuple[str, str]] = Field(default_factory=list, description="Query pairs in order")

    @classmethod
    def from_value(cls, query: "QueryParams | Mapping[str, Any] | Iterable[tuple[str, Any]] | BaseModel") -> "QueryParams":
        """Build params from a mapping, pair sequence, model or another QueryParams.

        ``None`` values are dropped and list values expand into repeated keys.
        """
        if isinstance(query, QueryParams):
            return cls(params=list(query.params))
        if isinstance(query, BaseModel):
            items: Iterable[tuple[str, Any]] = query.model_dump(mode="json", exclude_none=True).items()
        elif isinstance(query, Mapping):
            items = query.items()
        else:
            items = query

        result = cls()
        for key, value in items:
            if isinstance(value, (list, tuple)):
                for item in value:
                    result.add(key, item)
            else:
                result.add(key, value)
        return result

    def add(self, key: str, value: Any) -> "QueryParams":
        """Append a pair; ``None`` values are ignored."""
        if value is not None:
            self.params.append((str(key), render_param(value)))
        return self

    def extend(self, other: "QueryParams") -> "QueryParams":
        """Append every pair from another set of params."""
        self.params.extend(other.params)
        return self

    def __iter__(self) -> Iterator[tuple[str, str]]:  # type: ignore[override]
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __bool__(self) -> bool:
        return bool(self.params)
