"""Verbosity levels and the capabilities built on them.

Anything that can report how verbose it currently is implements
:class:`Verbose`. Anything that knows how verbose the output must be before
it is shown implements :class:`MinVerbosity`. Output is shown when the
minimum is less than or equal to the current level.
"""

from abc import ABC, abstractmethod
from enum import IntEnum


class Verbosity(IntEnum):
    """How much output the user wants to see, from nothing to everything."""

    QUIET = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def from_flags(cls, verbose: int = 0, quiet: bool = False) -> "Verbosity":
        """Map repeated ``-v`` flags (and ``-q``) onto a level.

        No flags gives ``LOW``; each ``-v`` adds one level up to ``HIGH``.
        """
        if quiet:
            return cls.QUIET
        return cls(min(cls.LOW + max(verbose, 0), cls.HIGH))

    @property
    def log_level(self) -> str:
        """Standard library level name matching this verbosity."""
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Verbosity.QUIET: "ERROR",
    Verbosity.LOW: "WARNING",
    Verbosity.MEDIUM: "INFO",
    Verbosity.HIGH: "DEBUG",
}


def meets_verbosity(minimum: Verbosity, current: Verbosity) -> bool:
    """Return True if output requiring ``minimum`` may be shown at ``current``."""
    return minimum <= current


class Verbose(ABC):
    """Reports the verbosity this object is running at."""

    @abstractmethod
    def verbosity(self) -> Verbosity:
        """Current verbosity level."""


class MinVerbosity(ABC):
    """Declares the verbosity required before this object is output."""

    @abstractmethod
    def min_verbosity(self) -> Verbosity:
        """Minimum verbosity at which output is shown."""

    def is_verbose_enough(self, current: "Verbosity | Verbose") -> bool:
        if isinstance(current, Verbose):
            current = current.verbosity()
        return meets_verbosity(self.min_verbosity(), current)
