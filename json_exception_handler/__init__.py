"""
JSON Exception Handler — structured JSON error responses for ASGI apps.

Application package root. Any unhandled failure raised while a request
is being served is turned into a stable JSON error document, logged or
suppressed according to its classification, and written back to the
caller with anti-caching headers.

Layers:
    - domain: Error document models, cause-chain walking, trace filtering.
    - application: Classification of failures into error documents.
    - interfaces: ASGI interceptor, response writing, health router.
    - shared: Cross-cutting concerns (error handler wiring, logging).
    - core: Configuration.
"""

from json_exception_handler.application.classifier import ErrorClassifier
from json_exception_handler.core.config import HandlerConfig, default_handler_config
from json_exception_handler.domain.models import (
    CauseNode,
    ErrorBehavior,
    ErrorKind,
    ErrorRecord,
    ValidationFailure,
)
from json_exception_handler.interfaces.middleware import ExceptionInterceptor
from json_exception_handler.shared.errors.handlers import register_error_handlers

__all__ = [
    "CauseNode",
    "ErrorBehavior",
    "ErrorClassifier",
    "ErrorKind",
    "ErrorRecord",
    "ExceptionInterceptor",
    "HandlerConfig",
    "ValidationFailure",
    "default_handler_config",
    "register_error_handlers",
]
