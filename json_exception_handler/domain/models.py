"""
Error document models.

The ErrorRecord is the outward-facing JSON document returned to API
callers. Field names are snake_case in Python and camelCase on the wire.
The ErrorKind discriminants are part of the wire contract and must never
be renumbered.
"""

from enum import IntEnum, IntFlag
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

_JSON_SCALARS = (str, int, float, bool, type(None))

STACK_TRACE_FIELD = "stack_trace"


class ErrorKind(IntEnum):
    """Coarse error classification used by clients for branching."""

    UNDETERMINED = 0
    SERVER_ERROR = 1
    REQUEST_ERROR = 2
    DATA_VALIDATION_ERROR = 3
    CONFIGURATION_ERROR = 4
    EXTERNAL_ERROR = 5
    NOT_IMPLEMENTED = 9
    SECURITY_ERROR = 10
    ACCESS_RESTRICTED_ERROR = 11
    NETWORK_ERROR = 18
    STORAGE_ERROR = 20
    STORAGE_CONCURRENCY_ERROR = 21
    CANCELLED_OPERATION = 30


class ErrorBehavior(IntFlag):
    """What the interceptor does with a classified failure."""

    IGNORE = 0
    LOG_ERROR = 1
    RESPOND_WITH_ERROR = 2
    LOG_AND_THROW_ERROR = LOG_ERROR | RESPOND_WITH_ERROR


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationFailure(_CamelModel):
    """A single property that failed data validation.

    Two failures are equal when they concern the same property and the
    same attempted value (compared as text). The message is not part of
    equality, so the same failure worded differently is deduplicated.

    Attributes:
        property_name: Name of the property which failed validation.
        attempted_value: Value that was attempted for the property.
        message: Validation message.
    """

    property_name: str = ""
    attempted_value: Any = None
    message: str = ""

    @field_serializer("attempted_value", when_used="json")
    def _serialize_attempted_value(self, value: Any) -> Any:
        if isinstance(value, _JSON_SCALARS):
            return value
        if isinstance(value, (list, tuple)) and all(
            isinstance(item, _JSON_SCALARS) for item in value
        ):
            return list(value)
        return str(value)

    def _key(self) -> tuple[str, str]:
        return self.property_name, str(self.attempted_value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationFailure):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class CauseNode(_CamelModel):
    """One level of an underlying cause chain."""

    title: str = ""
    exception_type: str = "Undetermined"
    inner_exception: Optional["CauseNode"] = None


class ErrorRecord(_CamelModel):
    """The JSON error document written for a failed request.

    Attributes:
        title: Primary human-readable message.
        exception_type: Class name of the raised failure.
        error_type: Coarse classification (integer on the wire).
        status: HTTP status to report.
        requested_url: Raw request target of the failing request.
        validation_errors: Failed properties, empty unless validation failed.
        inner_exception: Head of the underlying cause chain.
        stack_trace: Filtered trace lines, only when trace disclosure is on.
        error_behavior: Handler-internal flags, never serialized.
    """

    title: str = ""
    exception_type: str = "Undetermined"
    error_type: ErrorKind = ErrorKind.SERVER_ERROR
    status: int = 500
    requested_url: str = ""
    validation_errors: list[ValidationFailure] = Field(default_factory=list)
    inner_exception: Optional[CauseNode] = None
    stack_trace: Optional[list[str]] = None
    error_behavior: ErrorBehavior = Field(
        default=ErrorBehavior.LOG_AND_THROW_ERROR, exclude=True
    )

    def to_document(self) -> dict[str, Any]:
        """Return the wire document as a JSON-compatible dict."""
        exclude = {STACK_TRACE_FIELD} if self.stack_trace is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)

    def to_json(self) -> str:
        """Return the wire document as pretty-printed camelCase JSON."""
        exclude = {STACK_TRACE_FIELD} if self.stack_trace is None else None
        return self.model_dump_json(by_alias=True, indent=2, exclude=exclude)
