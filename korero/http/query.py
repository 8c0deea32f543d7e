"""Contracts for describing API calls as objects.

A :class:`Query` says where a request goes and what it carries. A
:class:`Strategy` says which method to use and how to run it. Subclass
:class:`QueryStrategy` to get both, with ``execute`` already wired to the
request builder.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from ..config import KoreroConfig
from ..models import Method, QueryParams
from .client import RequestBuilder

T = TypeVar("T")


class Query(ABC):
    """Describes the request to make for an endpoint."""

    @abstractmethod
    def endpoint(self) -> str:
        """Absolute URL to send the request to."""

    def params(self) -> QueryParams:
        """Optional. Query-string pairs."""
        return QueryParams()

    def body(self) -> str | None:
        """Optional. Body already serialized to JSON.

        May raise SerializationError if the body cannot be produced.
        """
        return None

    def token(self) -> str | None:
        """Optional. Bearer token for the Authorization header."""
        return None


class Strategy(ABC, Generic[T]):
    """An operation that runs with an HTTP method and returns ``T``."""

    @abstractmethod
    def method(self) -> Method:
        """HTTP method."""

    @abstractmethod
    def execute(self) -> T:
        """Run the operation."""


class QueryStrategy(Query, Strategy[T]):
    """Strategy that sends itself as a query and decodes the JSON response.

    Set ``response_model`` to validate the payload into a type; leave it as
    None to get the decoded JSON back.
    """

    response_model: ClassVar[Any] = None

    def __init__(self, config: KoreroConfig | None = None):
        self.config = config

    def execute(self) -> T:
        with RequestBuilder.from_query(self.method(), self, config=self.config) as builder:
            return builder.data(self.response_model)
