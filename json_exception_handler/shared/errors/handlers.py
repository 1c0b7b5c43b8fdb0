"""
Centralized error handling wiring for FastAPI.

Installs the JSON exception interceptor so that every unhandled failure
is turned into a JSON error document. All error responses use the
ErrorRecord schema.
"""

import logging
from typing import Optional

from starlette.applications import Starlette

from json_exception_handler.application.classifier import ClassificationHook
from json_exception_handler.core.config import HandlerConfig, default_handler_config
from json_exception_handler.interfaces.middleware import ExceptionInterceptor

logger = logging.getLogger(__name__)


def register_error_handlers(
    app: Starlette,
    config: Optional[HandlerConfig] = None,
    classify: Optional[ClassificationHook] = None,
    error_logger: Optional[logging.Logger] = None,
) -> None:
    """Register the JSON exception interceptor on the application.

    Args:
        app: The FastAPI (or plain Starlette) application instance.
        config: Interceptor options. Defaults to the default profile, which
            shows stack traces and hides the interceptor's own frames.
        classify: Classification hook. Defaults to leaving records unchanged.
        error_logger: Logger for failure entries. Defaults to the
            interceptor's module logger.
    """
    handler_config = config if config is not None else default_handler_config()
    app.add_middleware(
        ExceptionInterceptor,
        config=handler_config,
        classify=classify,
        logger=error_logger,
    )
    logger.debug(
        "JSON exception interceptor registered (show_stack_trace=%s)",
        handler_config.show_stack_trace,
    )
