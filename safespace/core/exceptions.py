"""SafeSpace - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射应在 API/HTTP 边界完成(见 `safespace/api/error_mapping.py`).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from safespace.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

LoggerExtra = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础业务异常."""
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class MalformedCheckResultError(ValidationError):
    """校验引擎返回了无法解析的失败结构.

    不会中断请求链路: 网关把它降级为 best-effort 的错误文案与原始 detail.
    """

    def __init__(self, message: str | None = None, *, detail: object = None) -> None:
        """记录原始失败对象,供响应 details 回显."""
        super().__init__(message or ErrorMessages.INVALID_INPUT, message_key="INVALID_INPUT")
        self.detail = detail


class UnknownSchemaError(AppError):
    """按名称查找未注册的 schema.

    属于装配期缺陷(路由绑定了不存在的 schema),应在注册路由时直接失败,
    不作为面向用户的请求级错误处理.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="UNKNOWN_SCHEMA",
    )

    def __init__(self, name: str) -> None:
        """携带未命中的 schema 名称."""
        super().__init__(
            ErrorMessages.UNKNOWN_SCHEMA.format(name=name),
            extra={"schema": name},
        )
        self.name = name


__all__ = [
    "AppError",
    "MalformedCheckResultError",
    "UnknownSchemaError",
    "ValidationError",
]
