"""
Error classification.

Builds the ErrorRecord for a raised failure: base fields from the
exception itself, then the pluggable classification hook, then the cause
chain and (optionally) the filtered stack trace.
"""

import logging
from collections.abc import Callable
from typing import Optional

from json_exception_handler.core.config import HandlerConfig
from json_exception_handler.domain.cause_chain import walk_causes
from json_exception_handler.domain.models import ErrorKind, ErrorRecord
from json_exception_handler.domain.trace_filter import filter_trace

logger = logging.getLogger(__name__)

ClassificationHook = Callable[[ErrorRecord, Exception], ErrorRecord]

DEFAULT_STATUS = 500
MIN_ERROR_STATUS = 400
TRACE_FAILURE_PREFIX = "Error getting original stack trace: "


def identity(record: ErrorRecord, exc: Exception) -> ErrorRecord:
    """Classification hook that leaves the record unchanged."""
    return record


class ErrorClassifier:
    """Produces a fully populated ErrorRecord from a raised failure.

    Args:
        config: Interceptor options (trace disclosure and frame filters).
        classify: Hook allowed to override any field of the base record.
    """

    def __init__(
        self,
        config: HandlerConfig,
        classify: Optional[ClassificationHook] = None,
    ) -> None:
        self._config = config
        self._classify = classify or identity

    def create_record(
        self, exc: Exception, status_code: Optional[int] = None
    ) -> ErrorRecord:
        """Build the base record before the hook runs."""
        status = DEFAULT_STATUS
        if status_code is not None and status_code >= MIN_ERROR_STATUS:
            status = status_code
        return ErrorRecord(
            title=str(exc),
            exception_type=type(exc).__name__,
            error_type=ErrorKind.SERVER_ERROR,
            status=status,
        )

    def add_inner_exceptions(self, record: ErrorRecord, exc: Exception) -> ErrorRecord:
        record.inner_exception = walk_causes(exc)
        return record

    def add_stack_trace(self, record: ErrorRecord, exc: Exception) -> ErrorRecord:
        """Attach the filtered trace when disclosure is enabled.

        Trace capture never fails the request: any error here is replaced
        by a single diagnostic line.
        """
        if not self._config.show_stack_trace:
            return record
        try:
            record.stack_trace = filter_trace(exc, self._config.omit_sources)
        except Exception as trace_exc:
            logger.debug("Stack trace capture failed", exc_info=trace_exc)
            record.stack_trace = [f"{TRACE_FAILURE_PREFIX}{trace_exc}"]
        return record

    def classify(
        self,
        exc: Exception,
        status_code: Optional[int] = None,
        requested_url: str = "",
    ) -> ErrorRecord:
        """Run the full classification pass for one failure.

        A hook that raises is logged and its changes are discarded, so the
        base record still goes out.

        Args:
            exc: The raised failure.
            status_code: Response status at failure time, if any.
            requested_url: Raw request target, visible to the hook.

        Returns:
            The populated ErrorRecord.
        """
        record = self.create_record(exc, status_code)
        record.requested_url = requested_url
        try:
            record = self._classify(record, exc)
        except Exception as hook_exc:
            logger.warning("Classification hook failed", exc_info=hook_exc)
            record = self.create_record(exc, status_code)
            record.requested_url = requested_url
        record = self.add_inner_exceptions(record, exc)
        return self.add_stack_trace(record, exc)
