"""Blocking HTTP request builder and API-call contracts."""

from ..models import Method, QueryParams
from .client import (
    DeserializationError,
    EndpointError,
    HTTPError,
    MethodError,
    RequestBuilder,
    RequestError,
    RetryableRequestError,
    SerializationError,
    StatusError,
    decode_response,
    is_success,
)
from .query import Query, QueryStrategy, Strategy

__all__ = [
    "DeserializationError",
    "EndpointError",
    "HTTPError",
    "Method",
    "MethodError",
    "Query",
    "QueryParams",
    "QueryStrategy",
    "RequestBuilder",
    "RequestError",
    "RetryableRequestError",
    "SerializationError",
    "StatusError",
    "Strategy",
    "decode_response",
    "is_success",
]
