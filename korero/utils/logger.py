"""Structured logging for korero, built on structlog and stdlib logging.

Loggers from :func:`get_logger` wrap stdlib loggers under the ``korero``
namespace, which carries a ``NullHandler``. Nothing is emitted until the
host application configures logging or :func:`setup_logging` attaches a
handler, and structlog's global configuration is never touched.
Terminal output meant for the user lives in :mod:`korero.output` instead.
"""

import logging
import sys
import time
from typing import Any

import structlog

ROOT_LOGGER = "korero"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())

# Processors applied when an event is logged; rendering happens in the handler
_EVENT_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

# Applied to records from plain stdlib loggers under the namespace
_FOREIGN_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]

_handler: logging.Handler | None = None


def setup_logging(log_level: str = "WARNING", json_logs: bool = False) -> None:
    """Send korero's diagnostics to stderr.

    Only the ``korero`` logger is configured; the root logger and any
    handlers the host application installed are left alone. Calling this
    again replaces the handler from the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON formatted logs
    """
    global _handler

    if json_logs:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ]
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
        processors = [structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=processors,
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,
        )
    )

    reset_logging()
    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper()))
    root.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Undo :func:`setup_logging`, returning korero to silent-by-default."""
    global _handler

    root = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.setLevel(logging.NOTSET)
    root.propagate = True


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the stdlib logger ``name``.

    Args:
        name: Logger name (typically __name__ of the calling module)
        **initial_context: Initial context to bind to all log messages
    """
    logger = structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER),
        processors=_EVENT_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger


class RequestLogContext:
    """Context manager that logs a single HTTP exchange.

    Logs the outgoing request on entry, then either the response status or
    the failure on exit, with the elapsed time in both cases.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, method: str, url: str):
        self.logger = logger.bind(method=method, url=url)
        self.start_time: float | None = None
        self.status_code: int | None = None

    def __enter__(self) -> "RequestLogContext":
        self.start_time = time.perf_counter()
        self.logger.debug("http_request")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> bool:
        duration = time.perf_counter() - self.start_time if self.start_time else 0.0

        if exc_val is not None:
            self.logger.debug(
                "http_request_failed",
                error_type=exc_type.__name__ if exc_type else "Unknown",
                error_message=str(exc_val),
                duration_seconds=round(duration, 3),
            )
            return False

        self.logger.debug(
            "http_response",
            status_code=self.status_code,
            duration_seconds=round(duration, 3),
        )
        return False

    def set_status(self, status_code: int) -> None:
        """Record the status code of the response."""
        self.status_code = status_code
