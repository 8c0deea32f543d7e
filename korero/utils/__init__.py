"""Utility modules for logging."""

from .logger import RequestLogContext, get_logger, reset_logging, setup_logging

__all__ = ["RequestLogContext", "get_logger", "reset_logging", "setup_logging"]
