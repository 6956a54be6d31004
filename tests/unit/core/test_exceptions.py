import pytest

from safespace.api.error_mapping import map_exception_to_status
from safespace.constants.system_constants import ErrorCategory, ErrorSeverity
from safespace.core.exceptions import AppError, MalformedCheckResultError, UnknownSchemaError, ValidationError


@pytest.mark.unit
def test_validation_error_metadata_defaults() -> None:
    error = ValidationError()

    assert error.message == "Validation Error"
    assert error.message_key == "VALIDATION_ERROR"
    assert error.category is ErrorCategory.VALIDATION
    assert error.severity is ErrorSeverity.LOW
    assert error.recoverable is True


@pytest.mark.unit
def test_malformed_check_result_carries_detail() -> None:
    error = MalformedCheckResultError("odd shape", detail={"raw": [1]})

    assert isinstance(error, ValidationError)
    assert error.message == "odd shape"
    assert error.detail == {"raw": [1]}


@pytest.mark.unit
def test_unknown_schema_error_is_wiring_defect() -> None:
    error = UnknownSchemaError("sign_up")

    assert error.message == "Unknown validation schema: sign_up"
    assert error.extra == {"schema": "sign_up"}
    assert error.category is ErrorCategory.SYSTEM
    assert error.recoverable is False


@pytest.mark.unit
def test_map_exception_to_status() -> None:
    assert map_exception_to_status(ValidationError("bad")) == 400
    assert map_exception_to_status(MalformedCheckResultError()) == 400
    assert map_exception_to_status(UnknownSchemaError("x")) == 500
    assert map_exception_to_status(AppError("boom"), default=503) == 503
    assert map_exception_to_status(KeyError("k")) == 500
