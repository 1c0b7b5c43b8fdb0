"""
Logging configuration for the application.

Sets up structured logging with a consistent format. The interceptor
logs each failure at ERROR with the exception attached, so tracebacks
appear in the server log even when they are hidden from API callers.
Logging must not change program behavior.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TracebackFreeFormatter(logging.Formatter):
    """Formatter that keeps log lines on one line by dropping tracebacks."""

    def formatException(self, ei) -> str:  # noqa: N802
        return ""

    def formatStack(self, stack_info: str) -> str:  # noqa: N802
        return ""


def configure_logging(level: str = "INFO", include_tracebacks: bool = True) -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        include_tracebacks: Print exception tracebacks under error entries.
    """
    handler = logging.StreamHandler(sys.stdout)
    formatter_class = logging.Formatter if include_tracebacks else TracebackFreeFormatter
    handler.setFormatter(formatter_class(LOG_FORMAT, LOG_DATE_FORMAT))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Suppress noisy per-request server loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
