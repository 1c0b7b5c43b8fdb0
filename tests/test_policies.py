"""
Tests for the built-in classification hooks.

Covers the rule table, hook composition, validation mapping and the
default policy.
"""

import pytest
from pydantic import BaseModel, ValidationError

from json_exception_handler.application.policies import (
    ClassificationRule,
    chain,
    default_policy,
    rule_table,
    validation_hook,
)
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


class _Order(BaseModel):
    quantity: int
    sku: str


def _pydantic_error() -> ValidationError:
    with pytest.raises(ValidationError) as info:
        _Order(quantity="many", sku="A-1")
    return info.value


def _record() -> ErrorRecord:
    return ErrorRecord(title="x", exception_type="X")


class TestRuleTable:
    """Tests for rule_table."""

    def test_matching_rule_applied(self) -> None:
        hook = rule_table(
            [
                ClassificationRule(
                    exception_types=(PermissionError,),
                    error_type=ErrorKind.ACCESS_RESTRICTED_ERROR,
                    status=403,
                    behavior=ErrorBehavior.RESPOND_WITH_ERROR,
                )
            ]
        )
        record = hook(_record(), PermissionError("nope"))
        assert record.error_type is ErrorKind.ACCESS_RESTRICTED_ERROR
        assert record.status == 403
        assert record.error_behavior is ErrorBehavior.RESPOND_WITH_ERROR

    def test_first_match_wins(self) -> None:
        hook = rule_table(
            [
                ClassificationRule(exception_types=(ConnectionError,), status=502),
                ClassificationRule(exception_types=(OSError,), status=507),
            ]
        )
        assert hook(_record(), ConnectionResetError()).status == 502
        assert hook(_record(), FileNotFoundError()).status == 507

    def test_unset_fields_left_alone(self) -> None:
        hook = rule_table([ClassificationRule(exception_types=(KeyError,), status=404)])
        record = hook(_record(), KeyError("k"))
        assert record.status == 404
        assert record.error_type is ErrorKind.SERVER_ERROR
        assert record.error_behavior is ErrorBehavior.LOG_AND_THROW_ERROR

    def test_no_match_unchanged(self) -> None:
        hook = rule_table([ClassificationRule(exception_types=(KeyError,), status=404)])
        assert hook(_record(), ValueError("v")).status == 500


class TestChain:
    """Tests for hook composition."""

    def test_hooks_run_in_order(self) -> None:
        calls = []

        def first(record: ErrorRecord, exc: Exception) -> ErrorRecord:
            calls.append("first")
            record.status = 418
            return record

        def second(record: ErrorRecord, exc: Exception) -> ErrorRecord:
            calls.append("second")
            record.status += 1
            return record

        assert chain(first, second)(_record(), RuntimeError()).status == 419
        assert calls == ["first", "second"]

    def test_empty_chain_is_identity(self) -> None:
        record = _record()
        assert chain()(record, RuntimeError()) is record


class TestValidationHook:
    """Tests for validation_hook."""

    def test_domain_validation_error(self) -> None:
        exc = DataValidationFailedError(
            "Data validation problem.",
            [ValidationFailure(property_name="Uno", attempted_value="cards", message="is not a game")],
        )
        record = validation_hook(_record(), exc)
        assert record.status == 400
        assert record.error_type is ErrorKind.DATA_VALIDATION_ERROR
        assert len(record.validation_errors) == 1
        failure = record.validation_errors[0]
        assert failure.property_name == "Uno"
        assert failure.message == "is not a game"
        assert str(failure.attempted_value) == "cards"

    def test_duplicate_failures_reported_once(self) -> None:
        exc = DataValidationFailedError(
            "dup",
            [
                ValidationFailure(property_name="Uno", attempted_value="cards", message="a"),
                ValidationFailure(property_name="Uno", attempted_value="cards", message="b"),
            ],
        )
        assert len(validation_hook(_record(), exc).validation_errors) == 1

    def test_pydantic_validation_error(self) -> None:
        record = validation_hook(_record(), _pydantic_error())
        assert record.status == 400
        assert record.error_type is ErrorKind.DATA_VALIDATION_ERROR
        assert len(record.validation_errors) == 1
        failure = record.validation_errors[0]
        assert failure.property_name == "quantity"
        assert failure.attempted_value == "many"
        assert failure.message

    def test_other_failures_untouched(self) -> None:
        record = validation_hook(_record(), RuntimeError("x"))
        assert record.status == 500
        assert record.validation_errors == []


class TestDefaultPolicy:
    """Tests for default_policy."""

    def test_cancelled_operation_responds_without_logging(self) -> None:
        record = default_policy(_record(), OperationCancelledError())
        assert record.error_type is ErrorKind.CANCELLED_OPERATION
        assert record.status == 499
        assert record.error_behavior is ErrorBehavior.RESPOND_WITH_ERROR

    def test_not_implemented(self) -> None:
        record = default_policy(_record(), NotImplementedError("later"))
        assert record.error_type is ErrorKind.NOT_IMPLEMENTED
        assert record.status == 501
        assert record.error_behavior is ErrorBehavior.LOG_AND_THROW_ERROR

    def test_validation_included(self) -> None:
        record = default_policy(_record(), _pydantic_error())
        assert record.error_type is ErrorKind.DATA_VALIDATION_ERROR

    def test_plain_failure_untouched(self) -> None:
        record = default_policy(_record(), RuntimeError("x"))
        assert record.error_type is ErrorKind.SERVER_ERROR
        assert record.status == 500
