"""
JSON exception interceptor middleware.

Wraps the rest of the ASGI application. When a request handler raises,
the failure is classified into an ErrorRecord, logged and/or written
back as a JSON error document according to the record's behavior flags.

The `http.response.start` message is held back until the first body
message, so a handler that fails after choosing a status but before
sending any bytes still gets a clean JSON response. Once a body message
has been forwarded the response has started and cannot be retracted:
the failure is logged and re-raised for an outer layer to deal with.

Streaming responses (server-sent events, long polls) therefore reach the
client headers-first only when their first body chunk is sent. A stream
that should open immediately can send an empty chunk with
`more_body=True` right after the start message.
"""

import logging
from typing import Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from json_exception_handler.application.classifier import (
    ClassificationHook,
    ErrorClassifier,
)
from json_exception_handler.core.config import INTERCEPTOR_SOURCE, HandlerConfig
from json_exception_handler.domain.models import ErrorBehavior, ErrorKind, ErrorRecord
from json_exception_handler.interfaces.responses import (
    write_empty_response,
    write_error_response,
)

HTTP_200 = 200

UNHANDLED_TEMPLATE = 'Unhandled exception occurred of type %s with message: "%s".'
VALIDATION_TEMPLATE = 'Data validation exception occurred with message: "%s".'
RESPONSE_STARTED_TEMPLATE = (
    UNHANDLED_TEMPLATE + " Response started - no JSON handler is launched!"
)


def requested_url(scope: Scope) -> str:
    """Return the raw request target (path plus query string) of `scope`."""
    raw_path = scope.get("raw_path")
    target = raw_path.decode("latin-1") if raw_path else scope.get("path", "")
    query_string = scope.get("query_string", b"")
    if query_string:
        target = f"{target}?{query_string.decode('latin-1')}"
    return target


class _ResponseTracker:
    """Wraps `send`, holding the response start until the body begins."""

    def __init__(self, send: Send) -> None:
        self._send = send
        self._pending_start: Optional[Message] = None
        self.started = False

    @property
    def status_code(self) -> Optional[int]:
        if self._pending_start is None:
            return None
        return self._pending_start["status"]

    async def send(self, message: Message) -> None:
        if message["type"] == "http.response.start" and not self.started:
            self._pending_start = message
            return
        await self._flush_start()
        await self._send(message)

    async def _flush_start(self) -> None:
        self.started = True
        if self._pending_start is not None:
            start, self._pending_start = self._pending_start, None
            await self._send(start)

    async def finish(self) -> None:
        """Forward a start message the application never followed with a body."""
        if self._pending_start is not None:
            await self._flush_start()


class ExceptionInterceptor:
    """ASGI middleware converting unhandled failures into JSON error documents.

    Args:
        app: The downstream ASGI application.
        config: Trace disclosure and frame filtering options.
        classify: Classification hook; defaults to leaving records unchanged.
        logger: Logger receiving error entries; defaults to the module logger.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Optional[HandlerConfig] = None,
        classify: Optional[ClassificationHook] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.app = app
        base_config = config if config is not None else HandlerConfig()
        self.config = base_config.with_omitted(INTERCEPTOR_SOURCE)
        self.classifier = ErrorClassifier(self.config, classify)
        self.logger = logger or logging.getLogger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        tracker = _ResponseTracker(send)
        try:
            await self.app(scope, receive, tracker.send)
        except Exception as exc:
            if tracker.started:
                self.logger.error(
                    RESPONSE_STARTED_TEMPLATE,
                    type(exc).__name__,
                    str(exc),
                    exc_info=exc,
                )
                raise
            await self.handle_exception(exc, tracker.status_code, scope, receive, send)
        else:
            await tracker.finish()

    async def handle_exception(
        self,
        exc: Exception,
        status_code: Optional[int],
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> ErrorRecord:
        """Classify, log and respond to a failure raised before the response started.

        Returns:
            The ErrorRecord produced for the failure.
        """
        record = self.classifier.classify(exc, status_code, requested_url(scope))

        if record.error_behavior & ErrorBehavior.LOG_ERROR:
            self.log_exception(record, exc)

        if record.error_behavior & ErrorBehavior.RESPOND_WITH_ERROR:
            await write_error_response(record, scope, receive, send)
        else:
            await write_empty_response(status_code or HTTP_200, scope, receive, send)
        return record

    def log_exception(self, record: ErrorRecord, exc: Exception) -> None:
        if record.error_type == ErrorKind.DATA_VALIDATION_ERROR:
            self.logger.error(VALIDATION_TEMPLATE, str(exc), exc_info=exc)
        else:
            self.logger.error(
                UNHANDLED_TEMPLATE, type(exc).__name__, str(exc), exc_info=exc
            )
