"""Verbosity-gated terminal output."""

from .logger import Logger, Logs, Prints, TerminalLogger, render
from .verbosity import MinVerbosity, Verbose, Verbosity, meets_verbosity

__all__ = [
    "Logger",
    "Logs",
    "MinVerbosity",
    "Prints",
    "TerminalLogger",
    "Verbose",
    "Verbosity",
    "meets_verbosity",
    "render",
]
