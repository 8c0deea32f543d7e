"""Logger capabilities and the terminal implementation.

A :class:`Logger` decides where text goes. A :class:`Prints` implementation
decides whether a value is shown and how it is rendered. An object that owns
a logger exposes it through :class:`Logs` so callers can write
``task.log(value, Verbosity.MEDIUM)`` without reaching inside it.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

import click
from pydantic import BaseModel

from .verbosity import MinVerbosity, Verbose, Verbosity, meets_verbosity


class Logger(ABC):
    """Writes already-rendered text to some destination."""

    @abstractmethod
    def write(self, text: str, *, err: bool = False) -> None:
        """Write a line of text, to the error stream if ``err`` is set."""


class Prints(ABC):
    """Outputs values subject to a minimum verbosity."""

    @abstractmethod
    def print(self, value: Any, min_verbosity: Verbosity | None = None) -> bool:
        """Output ``value`` if verbose enough; return whether it was written."""


class Logs(ABC):
    """Grants access to a logger that lives on another object."""

    @abstractmethod
    def logger(self) -> Prints:
        """The logger output should go through."""

    def log(self, value: Any, min_verbosity: Verbosity | None = None) -> bool:
        return self.logger().print(value, min_verbosity)


def render(value: Any) -> str:
    """Render a value for the terminal.

    Models and JSON containers are pretty-printed; anything else uses str().
    """
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, default=str, ensure_ascii=False)
    return str(value)


class TerminalLogger(Verbose, Logger, Prints):
    """Logger that writes to the terminal, gated by a verbosity level.

    Values implementing :class:`MinVerbosity` carry their own minimum; for
    everything else the minimum passed to :meth:`print` applies, defaulting
    to ``Verbosity.LOW``.
    """

    def __init__(self, verbosity: Verbosity = Verbosity.LOW):
        self._verbosity = Verbosity(verbosity)

    def verbosity(self) -> Verbosity:
        return self._verbosity

    def write(self, text: str, *, err: bool = False) -> None:
        click.echo(text, err=err)

    def print(self, value: Any, min_verbosity: Verbosity | None = None) -> bool:
        if min_verbosity is None:
            if isinstance(value, MinVerbosity):
                min_verbosity = value.min_verbosity()
            else:
                min_verbosity = Verbosity.LOW

        if not meets_verbosity(min_verbosity, self._verbosity):
            return False

        self.write(render(value))
        return True

    def info(self, value: Any) -> bool:
        return self.print(value, Verbosity.LOW)

    def detail(self, value: Any) -> bool:
        return self.print(value, Verbosity.MEDIUM)

    def debug(self, value: Any) -> bool:
        return self.print(value, Verbosity.HIGH)

    def error(self, value: Any) -> None:
        """Write to stderr regardless of verbosity."""
        self.write(render(value), err=True)

    def __repr__(self) -> str:
        return f"TerminalLogger(verbosity={self._verbosity.name})"
