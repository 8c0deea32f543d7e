"""Fluent request builder on top of requests.

Builds a single request step by step (method, endpoint, bearer auth, query
parameters, JSON body) and sends it on a ``requests.Session``. Every failure
surfaces as an :class:`HTTPError` subclass instead of escaping as a bare
requests or JSON exception.
"""

import json
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import KoreroConfig
from ..models import Method, QueryParams
from ..utils.logger import RequestLogContext, get_logger

if TYPE_CHECKING:
    from .query import Query

logger = get_logger(__name__)

T = TypeVar("T")


class HTTPError(Exception):
    """Base exception for HTTP-related errors."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class EndpointError(HTTPError):
    """The endpoint could not be parsed as an absolute URL."""

    pass


class MethodError(HTTPError):
    """The HTTP method is not one the builder supports."""

    pass


class SerializationError(HTTPError):
    """A request body could not be serialized to JSON."""

    pass


class RequestError(HTTPError):
    """The request never produced a response (connection, TLS, scheme)."""

    pass


class RetryableRequestError(RequestError):
    """Transport failure that may succeed on another attempt (timeouts, connection errors)."""

    pass


class StatusError(HTTPError):
    """The server answered with a non-2xx status."""

    pass


class DeserializationError(HTTPError):
    """A successful response body was not JSON or did not fit the requested type."""

    pass


def is_success(status_code: int) -> bool:
    """Determine if a status code is in the 2xx range."""
    return 200 <= status_code < 300


def decode_response(response: requests.Response, model: type[T] | Any = None) -> T | Any:
    """Map a response to its JSON payload, or to a StatusError on non-2xx.

    Raises:
        StatusError: If the response status is not 2xx
        DeserializationError: If the body is not JSON or does not validate
    """
    if not is_success(response.status_code):
        raise StatusError(
            f"Server returned {response.status_code}",
            status_code=response.status_code,
            url=response.url,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise DeserializationError(
            f"Response is not valid JSON: {e}",
            status_code=response.status_code,
            url=response.url,
        ) from e

    if model is None:
        return payload

    try:
        return TypeAdapter(model).validate_python(payload)
    except ValidationError as e:
        raise DeserializationError(
            f"Response does not match {getattr(model, '__name__', model)}: {e}",
            status_code=response.status_code,
            url=response.url,
        ) from e


class RequestBuilder:
    """Builder for a single HTTP request.

    Typical use::

        with RequestBuilder(Method.GET, "https://api.example.com/items") as req:
            items = req.add_auth(token).add_query({"page": 2}).data()

    The builder owns its request state for its whole lifetime; ``init`` points
    it at a new method and endpoint while keeping the session (and its
    connection pool).
    """

    def __init__(
        self,
        method: Method | str,
        endpoint: str,
        *,
        session: requests.Session | None = None,
        config: KoreroConfig | None = None,
    ):
        """Initialize the builder and parse ``endpoint``.

        Args:
            method: HTTP method, as a Method or a case-insensitive name
            endpoint: Absolute URL to send the request to
            session: Session to send on; one is created (and owned) if omitted
            config: Timeout, retry and header settings

        Raises:
            MethodError: If ``method`` is not a supported HTTP method
            EndpointError: If ``endpoint`` is not an absolute URL
        """
        self.config = config or KoreroConfig()
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update(self.config.session_headers)
        self.session = session
        try:
            self.init(method, endpoint)
        except HTTPError:
            self.close()
            raise

    @classmethod
    def from_query(cls, method: Method | str, query: "Query", **kwargs: Any) -> "RequestBuilder":
        """Build a request from a :class:`~korero.http.query.Query`.

        Applies the query's endpoint, bearer token, parameters and
        pre-serialized body.
        """
        builder = cls(method, query.endpoint(), **kwargs)
        token = query.token()
        if token:
            builder.add_auth(token)
        params = query.params()
        if params:
            builder.add_query(params)
        body = query.body()
        if body is not None:
            builder.add_raw_body(body)
        return builder

    def init(self, method: Method | str, endpoint: str) -> "RequestBuilder":
        """Start a fresh request for ``method`` and ``endpoint``.

        Auth, parameters and body from any previous request are discarded.
        """
        try:
            parsed_method = Method.parse(method)
        except ValueError as e:
            raise MethodError(str(e), url=str(endpoint)) from e
        self.url = self.parse_endpoint(endpoint)
        self.method = parsed_method
        self.request = requests.Request(method=self.method.value, url=self.url, headers=dict(self.config.headers))
        self.params = QueryParams()
        return self

    def add_auth(self, token: str) -> "RequestBuilder":
        """Add an ``Authorization: Bearer <token>`` header."""
        self.request.headers["Authorization"] = f"Bearer {token}"
        return self

    def add_query(self, query: Any) -> "RequestBuilder":
        """Append query parameters, e.g. ``{"id": 123, "foo": "abc"}`` -> ``?id=123&foo=abc``.

        Accepts a mapping, a sequence of pairs, a QueryParams or a pydantic
        model. Calls accumulate.
        """
        self.params.extend(QueryParams.from_value(query))
        return self

    def add_body(self, model: Any) -> "RequestBuilder":
        """Serialize ``model`` to JSON and use it as the request body.

        Raises:
            SerializationError: If ``model`` cannot be represented as JSON
        """
        try:
            if isinstance(model, BaseModel):
                body = model.model_dump_json()
            else:
                body = json.dumps(model)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize body to JSON: {e}", url=self.url) from e
        return self.add_raw_body(body)

    def add_raw_body(self, body: str) -> "RequestBuilder":
        """Use an already-serialized JSON string as the request body."""
        self.request.data = body.encode("utf-8")
        self.request.headers["Content-Type"] = "application/json"
        return self

    def prepare(self) -> requests.PreparedRequest:
        """Return the request exactly as it would be sent.

        Raises:
            RequestError: If requests rejects the request (e.g. invalid header)
        """
        self.request.params = list(self.params)
        try:
            return self.session.prepare_request(self.request)
        except requests.exceptions.RequestException as e:
            raise RequestError(f"Failed to build request: {e}", url=self.url) from e

    def send(self) -> requests.Response:
        """Send the request and return the response, whatever its status.

        Connection errors and timeouts are retried up to
        ``config.max_attempts`` times with exponential backoff.

        Raises:
            RequestError: If no response was received
        """
        prepared = self.prepare()
        retrying = Retrying(
            retry=retry_if_exception_type(RetryableRequestError),
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(multiplier=self.config.backoff_multiplier, max=30),
            reraise=True,
        )
        return retrying(self._send_once, prepared)

    def data(self, model: type[T] | Any = None) -> T | Any:
        """Send the request and decode a successful JSON response.

        Args:
            model: Optional type to validate the payload into (a pydantic
                model, a dataclass, ``list[Item]`` and so on)

        Returns:
            The decoded JSON, or an instance of ``model``

        Raises:
            StatusError: If the response status is not 2xx
            DeserializationError: If the body is not JSON or does not validate
            RequestError: If no response was received
        """
        return decode_response(self.send(), model)

    @staticmethod
    def parse_endpoint(endpoint: str) -> str:
        """Parse ``endpoint`` into a normalized absolute URL.

        Raises:
            EndpointError: If there is no scheme or no host
        """
        prepared = requests.PreparedRequest()
        try:
            prepared.prepare_url(endpoint, None)
        except requests.exceptions.RequestException as e:
            raise EndpointError(f"Failed to parse endpoint: {e}", url=str(endpoint)) from e
        url = prepared.url or ""
        # prepare_url passes non-http "scheme:rest" strings through untouched
        if not urlsplit(url).netloc:
            raise EndpointError(f"Failed to parse endpoint: no host in {endpoint!r}", url=str(endpoint))
        return url

    def _send_once(self, prepared: requests.PreparedRequest) -> requests.Response:
        """Make a single attempt, translating requests exceptions."""
        url = prepared.url or self.url
        settings = self.session.merge_environment_settings(url, {}, None, None, None)
        with RequestLogContext(logger, self.method.value, url) as ctx:
            try:
                response = self.session.send(prepared, timeout=self.config.timeout, **settings)
            except requests.exceptions.Timeout as e:
                raise RetryableRequestError(f"Request timed out: {e}", url=url) from e
            except requests.exceptions.ConnectionError as e:
                raise RetryableRequestError(f"Connection error: {e}", url=url) from e
            except requests.exceptions.RequestException as e:
                raise RequestError(f"Request failed: {e}", url=url) from e
            ctx.set_status(response.status_code)
        return response

    def close(self) -> None:
        """Close the underlying session if this builder created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RequestBuilder":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RequestBuilder({self.method.value} {self.url})"
