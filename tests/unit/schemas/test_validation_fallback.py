"""校验引擎失败形状异常时的兜底路径."""

from dataclasses import dataclass

import pytest

from safespace.schemas.constraints import FieldConstraint, FieldKind, Schema
from safespace.schemas.validation import (
    OpaqueFailure,
    Rejected,
    StructuredFailure,
    _failure_from_validation_error,
    render_rejection,
    validate_payload,
)

_SCHEMA = Schema("demo", (FieldConstraint("name", FieldKind.TEXT, required=True),))


@dataclass
class _ExplodingCompiled:
    error: Exception
    schema: Schema = _SCHEMA

    @property
    def name(self) -> str:
        return self.schema.name

    def validate(self, payload):
        raise self.error


class _FakeValidationError:
    title = "demo"

    def __init__(self, errors: list[dict]) -> None:
        self._errors = errors

    def errors(self, **_kwargs):
        return self._errors


@pytest.mark.unit
def test_unexpected_engine_error_degrades_to_opaque_failure() -> None:
    outcome = validate_payload(_ExplodingCompiled(ValueError("engine exploded")), {"name": "Asha"})

    assert isinstance(outcome, Rejected)
    assert isinstance(outcome.failure, OpaqueFailure)
    body = render_rejection(outcome)
    assert body == {
        "error": "Validation Error",
        "message": "engine exploded",
        "details": {"name": "ValueError", "message": "engine exploded"},
    }


@pytest.mark.unit
def test_opaque_failure_without_message_uses_generic_text() -> None:
    outcome = validate_payload(_ExplodingCompiled(TypeError()), {"name": "Asha"})

    assert isinstance(outcome, Rejected)
    assert render_rejection(outcome)["message"] == "Invalid input data"


@pytest.mark.unit
def test_malformed_error_entries_echo_raw_detail() -> None:
    exc = _FakeValidationError([{"msg": "something odd", "input": "secret1"}])

    failure = _failure_from_validation_error(_SCHEMA, exc)  # type: ignore[arg-type]

    assert isinstance(failure, OpaqueFailure)
    assert failure.message == "something odd"
    assert failure.detail == {"msg": "something odd"}


@pytest.mark.unit
def test_error_entries_without_message_fall_back_to_generic_text() -> None:
    exc = _FakeValidationError([{"loc": ("name",), "type": "custom"}])

    failure = _failure_from_validation_error(_SCHEMA, exc)  # type: ignore[arg-type]

    assert isinstance(failure, OpaqueFailure)
    assert failure.message == "Invalid input data"
    assert failure.detail == {"loc": ["name"], "type": "custom"}


@pytest.mark.unit
def test_empty_error_list_yields_opaque_failure() -> None:
    failure = _failure_from_validation_error(_SCHEMA, _FakeValidationError([]))  # type: ignore[arg-type]

    assert isinstance(failure, OpaqueFailure)
    assert failure.detail == {"title": "demo", "errors": []}


@pytest.mark.unit
def test_engine_message_is_used_for_unrecognised_error_types() -> None:
    exc = _FakeValidationError([{"loc": ("name",), "type": "string_type", "msg": "Input should be a valid string"}])

    failure = _failure_from_validation_error(_SCHEMA, exc)  # type: ignore[arg-type]

    assert isinstance(failure, StructuredFailure)
    assert failure.message == "Input should be a valid string"
    assert failure.fields() == ("name",)
