"""校验网关: 把 payload 与命名 schema 比对, 输出 Accepted / Rejected.

说明:
- 每个字段独立校验, 不在第一个错误处短路; 失败信息按字段声明顺序排列.
- 失败结果是带标签的两种形态: 结构化字段失败列表(StructuredFailure)
  或无法解析的原始失败(OpaqueFailure), 调用方无需再嗅探错误形状.
- 每次 Rejected 都会先记录 warning 日志, 再交给 HTTP 层渲染 400 响应.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, TypeAlias

from pydantic import ValidationError as PydanticValidationError

from safespace.constants.system_constants import ErrorMessages
from safespace.core.exceptions import MalformedCheckResultError
from safespace.schemas.checks import ConstraintError
from safespace.schemas.compiler import CompiledSchema
from safespace.schemas.constraints import Schema, ViolationKind
from safespace.schemas.registry import SchemaRegistry
from safespace.utils.structlog_config import log_debug, log_warning

VALIDATION_ERROR_LABEL: Final = "Validation Error"
BODY_FIELD: Final = "body"

PathSegment: TypeAlias = str | int


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """单个字段的失败."""

    path: tuple[PathSegment, ...]
    kind: ViolationKind
    message: str

    @property
    def field(self) -> str:
        return ".".join(str(segment) for segment in self.path) or BODY_FIELD

    def to_dict(self) -> dict[str, object]:
        return {
            "field": self.field,
            "path": list(self.path),
            "code": self.kind.value,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class StructuredFailure:
    """校验引擎给出的结构化字段失败列表."""

    violations: tuple[FieldViolation, ...]

    @property
    def message(self) -> str:
        return ", ".join(violation.message for violation in self.violations)

    def details(self) -> list[dict[str, object]]:
        return [violation.to_dict() for violation in self.violations]

    def fields(self) -> tuple[str, ...]:
        return tuple(violation.field for violation in self.violations)


@dataclass(frozen=True, slots=True)
class OpaqueFailure:
    """无法解析为字段列表的失败, 保留原始文案与原始对象."""

    message: str
    detail: object


CheckFailure: TypeAlias = StructuredFailure | OpaqueFailure


@dataclass(frozen=True, slots=True)
class Accepted:
    """校验通过: 已填充缺省值并完成类型规范化的 payload."""

    payload: dict[str, object]

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    """校验失败: 整个请求被拒绝, 不存在部分通过."""

    schema: str
    failure: CheckFailure

    @property
    def accepted(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.failure.message or ErrorMessages.INVALID_INPUT


ValidationOutcome: TypeAlias = Accepted | Rejected


def validate_payload(compiled: CompiledSchema, payload: object) -> ValidationOutcome:
    """对单个 payload 执行一次完整的校验.

    Args:
        compiled: 已编译的 schema.
        payload: 请求体解析结果, 期望为 JSON object.

    Returns:
        Accepted 或 Rejected.

    """
    if not isinstance(payload, Mapping):
        violation = FieldViolation((BODY_FIELD,), ViolationKind.TYPE_MISMATCH, ErrorMessages.BODY_NOT_OBJECT)
        return Rejected(compiled.name, StructuredFailure((violation,)))

    try:
        normalized = compiled.validate(payload)
    except PydanticValidationError as exc:
        return Rejected(compiled.name, _failure_from_validation_error(compiled.schema, exc))
    except (TypeError, ValueError) as exc:
        return Rejected(compiled.name, _opaque_failure(exc))
    return Accepted(normalized)


def render_rejection(outcome: Rejected) -> dict[str, object]:
    """渲染 400 响应体: error / message / details."""
    failure = outcome.failure
    if isinstance(failure, StructuredFailure):
        return {
            "error": VALIDATION_ERROR_LABEL,
            "message": failure.message,
            "details": failure.details(),
        }
    return {
        "error": VALIDATION_ERROR_LABEL,
        "message": failure.message or ErrorMessages.INVALID_INPUT,
        "details": failure.detail,
    }


class ValidationGate:
    """持有 registry 的校验网关.

    Example:
        >>> gate = ValidationGate(default_registry())
        >>> outcome = gate.validate("signup", {"name": "Asha", ...})

    """

    __slots__ = ("registry",)

    def __init__(self, registry: SchemaRegistry) -> None:
        self.registry = registry

    def ensure(self, name: str) -> CompiledSchema:
        """确认 schema 已注册, 未注册时抛出 UnknownSchemaError."""
        return self.registry.compiled(name)

    def validate(self, name: str, payload: object) -> ValidationOutcome:
        outcome = validate_payload(self.registry.compiled(name), payload)
        if isinstance(outcome, Rejected):
            _log_rejection(outcome)
        else:
            log_debug("payload accepted", module="validation", schema=name, fields=sorted(outcome.payload))
        return outcome


def _log_rejection(outcome: Rejected) -> None:
    failure = outcome.failure
    raw_error: object
    if isinstance(failure, StructuredFailure):
        raw_error = failure.details()
    else:
        raw_error = {"message": failure.message, "detail": failure.detail}
    log_warning(
        VALIDATION_ERROR_LABEL,
        module="validation",
        schema=outcome.schema,
        category=VALIDATION_ERROR_LABEL,
        error=raw_error,
    )


def _failure_from_validation_error(schema: Schema, exc: PydanticValidationError) -> CheckFailure:
    try:
        violations = [_violation_from_error(schema, error) for error in exc.errors(include_url=False)]
    except MalformedCheckResultError as malformed:
        return OpaqueFailure(malformed.message, malformed.detail)

    if not violations:
        return OpaqueFailure(ErrorMessages.INVALID_INPUT, {"title": exc.title, "errors": []})

    # pydantic 已按字段顺序输出, 这里保证未知字段等落在已声明字段之后
    violations.sort(key=lambda violation: schema.position(str(violation.path[0])))
    return StructuredFailure(tuple(violations))


def _violation_from_error(schema: Schema, error: Mapping[str, object]) -> FieldViolation:
    loc = error.get("loc")
    error_type = error.get("type")
    if not isinstance(loc, tuple) or not isinstance(error_type, str):
        raise MalformedCheckResultError(_raw_message(error), detail=_describe_error(error))

    path: tuple[PathSegment, ...] = tuple(segment for segment in loc if isinstance(segment, (str, int))) or (
        BODY_FIELD,
    )

    ctx = error.get("ctx")
    if isinstance(ctx, Mapping):
        raw_error = ctx.get("error")
        if isinstance(raw_error, ConstraintError):
            return FieldViolation(path, raw_error.kind, raw_error.message)

    if error_type == "missing":
        return FieldViolation(path, ViolationKind.MISSING_REQUIRED, _required_message(schema, path))

    if error_type == "extra_forbidden":
        joined = ".".join(str(segment) for segment in path)
        return FieldViolation(path, ViolationKind.UNEXPECTED_FIELD, f"Unexpected field: {joined}")

    message = error.get("msg")
    if isinstance(message, str) and message.strip():
        return FieldViolation(path, ViolationKind.TYPE_MISMATCH, message)

    raise MalformedCheckResultError(_raw_message(error), detail=_describe_error(error))


def _required_message(schema: Schema, path: tuple[PathSegment, ...]) -> str:
    constraint = schema.resolve(path)
    if constraint is None:
        joined = ".".join(str(segment) for segment in path)
        return f"{joined} is required"
    return constraint.message_for("required", f"{constraint.display_name} is required")


def _raw_message(error: Mapping[str, object]) -> str:
    message = error.get("msg")
    if isinstance(message, str) and message.strip():
        return message
    return ErrorMessages.INVALID_INPUT


def _describe_error(error: Mapping[str, object]) -> dict[str, object]:
    # ctx 中可能包含异常对象, 只保留可序列化的部分; input 可能含密码, 不回显
    described: dict[str, object] = {}
    for key, value in error.items():
        if key in {"input", "url"}:
            continue
        if isinstance(value, (str, int, float, bool)) or value is None:
            described[str(key)] = value
        elif isinstance(value, (tuple, list)):
            described[str(key)] = [item if isinstance(item, (str, int)) else str(item) for item in value]
        else:
            described[str(key)] = str(value)
    return described


def _opaque_failure(exc: Exception) -> OpaqueFailure:
    message = str(exc).strip() or ErrorMessages.INVALID_INPUT
    return OpaqueFailure(message, {"name": type(exc).__name__, "message": message})


__all__ = [
    "VALIDATION_ERROR_LABEL",
    "Accepted",
    "CheckFailure",
    "FieldViolation",
    "OpaqueFailure",
    "Rejected",
    "StructuredFailure",
    "ValidationGate",
    "ValidationOutcome",
    "render_rejection",
    "validate_payload",
]
