"""
Domain-specific errors understood by the built-in classification hooks.

Application code may raise these to get a tailored error document
without writing its own hook. No framework imports allowed.
"""

from collections.abc import Iterable

from json_exception_handler.domain.models import ValidationFailure


class JsonHandlerDomainError(Exception):
    """Base error for all failures with a dedicated classification."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DataValidationFailedError(JsonHandlerDomainError):
    """Raised when incoming data fails validation.

    Carries every failed property so the caller can show them all at once.
    """

    def __init__(
        self, message: str, failures: Iterable[ValidationFailure] = ()
    ) -> None:
        super().__init__(message)
        self.failures = list(failures)


class OperationCancelledError(JsonHandlerDomainError):
    """Raised when an operation is cancelled before it completes."""

    def __init__(self, message: str = "Operation was cancelled.") -> None:
        super().__init__(message)
