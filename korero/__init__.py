"""Kōrero, a communication library.

Two small conveniences that keep getting copied between projects:

* :mod:`korero.http`: a fluent builder over a blocking ``requests`` session,
  with bearer auth, query parameters, JSON bodies and typed responses.
* :mod:`korero.output`: verbosity-gated terminal output. Construct a
  :class:`~korero.output.TerminalLogger` with a
  :class:`~korero.output.Verbosity` and give each message the minimum
  verbosity it needs to be shown.
"""

__version__ = "0.1.0"

from .config import KoreroConfig
from .http import (
    HTTPError,
    Method,
    Query,
    QueryParams,
    QueryStrategy,
    RequestBuilder,
    StatusError,
    Strategy,
)
from .output import MinVerbosity, TerminalLogger, Verbose, Verbosity

__all__ = [
    "HTTPError",
    "KoreroConfig",
    "Method",
    "MinVerbosity",
    "Query",
    "QueryParams",
    "QueryStrategy",
    "RequestBuilder",
    "StatusError",
    "Strategy",
    "TerminalLogger",
    "Verbose",
    "Verbosity",
]
