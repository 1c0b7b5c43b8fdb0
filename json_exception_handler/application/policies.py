"""
Classification hooks.

A hook has the signature ``(record, exc) -> record`` and may override any
field of the base ErrorRecord. Deployments compose their own policy from
the building blocks here: a rule table keyed by exception type, the
validation hook, and `chain` to run several hooks in order.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from json_exception_handler.application.classifier import ClassificationHook, identity
from json_exception_handler.domain.errors import (
    DataValidationFailedError,
    OperationCancelledError,
)
from json_exception_handler.domain.models import (
    ErrorBehavior,
    ErrorKind,
    ErrorRecord,
    ValidationFailure,
)

HTTP_400 = 400
HTTP_499 = 499
HTTP_501 = 501


@dataclass(frozen=True)
class ClassificationRule:
    """Overrides applied when a failure is an instance of `exception_types`.

    Attributes left as None keep whatever the record already holds.
    """

    exception_types: tuple[type[BaseException], ...]
    error_type: Optional[ErrorKind] = None
    status: Optional[int] = None
    behavior: Optional[ErrorBehavior] = None

    def matches(self, exc: BaseException) -> bool:
        return isinstance(exc, self.exception_types)

    def apply(self, record: ErrorRecord) -> ErrorRecord:
        if self.error_type is not None:
            record.error_type = self.error_type
        if self.status is not None:
            record.status = self.status
        if self.behavior is not None:
            record.error_behavior = self.behavior
        return record


def rule_table(rules: Sequence[ClassificationRule]) -> ClassificationHook:
    """Build a hook applying the first rule matching the failure."""
    table = tuple(rules)

    def classify(record: ErrorRecord, exc: Exception) -> ErrorRecord:
        for rule in table:
            if rule.matches(exc):
                return rule.apply(record)
        return record

    return classify


def chain(*hooks: ClassificationHook) -> ClassificationHook:
    """Compose hooks; each one receives the record returned by the previous."""
    if not hooks:
        return identity

    def classify(record: ErrorRecord, exc: Exception) -> ErrorRecord:
        for hook in hooks:
            record = hook(record, exc)
        return record

    return classify


def _pydantic_failures(exc: ValidationError) -> Iterable[ValidationFailure]:
    for error in exc.errors(include_url=False):
        yield ValidationFailure(
            property_name=".".join(str(part) for part in error.get("loc", ())),
            attempted_value=error.get("input"),
            message=error.get("msg", ""),
        )


def validation_hook(record: ErrorRecord, exc: Exception) -> ErrorRecord:
    """Map data validation failures to a 400 with every failed property.

    Handles DataValidationFailedError and pydantic's ValidationError.
    Duplicate failures (same property and value) are reported once.
    """
    if isinstance(exc, DataValidationFailedError):
        failures: Iterable[ValidationFailure] = exc.failures
    elif isinstance(exc, ValidationError):
        failures = _pydantic_failures(exc)
    else:
        return record

    record.status = HTTP_400
    record.error_type = ErrorKind.DATA_VALIDATION_ERROR
    for failure in failures:
        if failure not in record.validation_errors:
            record.validation_errors.append(failure)
    return record


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        exception_types=(OperationCancelledError,),
        error_type=ErrorKind.CANCELLED_OPERATION,
        status=HTTP_499,
        behavior=ErrorBehavior.RESPOND_WITH_ERROR,
    ),
    ClassificationRule(
        exception_types=(NotImplementedError,),
        error_type=ErrorKind.NOT_IMPLEMENTED,
        status=HTTP_501,
    ),
)

default_policy: ClassificationHook = chain(validation_hook, rule_table(DEFAULT_RULES))
