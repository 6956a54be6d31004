"""SafeSpace 项目的结构化日志配置与辅助函数."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context

from safespace.constants.system_constants import ErrorSeverity
from safespace.settings import APP_NAME, APP_VERSION
from safespace.utils.logging.context_vars import request_id_var, schema_name_var
from safespace.utils.logging.debug_filter import DebugFilter
from safespace.utils.logging.error_adapter import (
    ErrorContext,
    ErrorMetadata,
    build_public_context,
    derive_error_metadata,
    get_error_suggestions,
)

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from structlog.typing import BindableLogger, Processor

LogField = object
ErrorPayload = dict[str, object]


class StructlogConfig:
    """structlog 配置核心类.

    负责配置处理器链与调试日志过滤; 可以多次调用 configure, 只会配置一次.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,将附加应用特定配置.

        """
        if not self.configured:
            processors = [
                self.debug_filter,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._add_request_context,
                self._add_global_context,
                self._get_renderer(),
            ]
            structlog.configure(
                processors=cast("list[Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            self.debug_filter.set_enabled(enabled=bool(app.config.get("ENABLE_DEBUG_LOG", False)))

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: MutableMapping[str, object],
    ) -> MutableMapping[str, object]:
        """向事件字典写入请求上下文(request_id 与正在使用的 schema)."""
        if has_request_context():
            event_dict["request_id"] = request_id_var.get()
            schema_name = schema_name_var.get()
            if schema_name is not None:
                event_dict.setdefault("schema", schema_name)
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: MutableMapping[str, object],
    ) -> MutableMapping[str, object]:
        """附加应用名、版本与环境."""
        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config["APP_VERSION"]
            event_dict["environment"] = current_app.config.get("ENV", "development")
        except (RuntimeError, KeyError):
            event_dict["app_name"] = APP_NAME
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    @staticmethod
    def _get_renderer() -> Processor:
        """终端输出使用可读格式, 否则输出 JSON 行."""
        if sys.stdout.isatty():
            return structlog.dev.ConsoleRenderer(colors=True)
        return structlog.processors.JSONRenderer(default=str)


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Example:
        >>> logger = get_logger('my_module')
        >>> logger.info('payload accepted', schema='signup')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册 Flask 钩子."""
    structlog_config.configure(app)

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def should_log_debug() -> bool:
    """检查是否应该记录调试日志."""
    try:
        return bool(current_app.config.get("ENABLE_DEBUG_LOG", False))
    except RuntimeError:
        return False


def log_info(message: str, module: str = "app", **kwargs: LogField) -> None:
    """记录信息级别日志.

    Example:
        >>> log_info('payload accepted', module='validation', schema='signup')

    """
    get_logger("app").info(message, module=module, **kwargs)


def log_warning(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    """记录警告级别日志."""
    logger = get_logger("app")
    if exception:
        logger.warning(message, module=module, exception=str(exception), **kwargs)
    else:
        logger.warning(message, module=module, **kwargs)


def log_error(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    """记录错误级别日志, 带异常时输出堆栈."""
    logger = get_logger("app")
    if exception:
        logger.exception(message, module=module, error=str(exception), **kwargs)
    else:
        logger.error(message, module=module, **kwargs)


def log_critical(
    message: str,
    module: str = "app",
    exception: Exception | None = None,
    **kwargs: LogField,
) -> None:
    logger = get_logger("app")
    if exception:
        logger.critical(message, module=module, error=str(exception), **kwargs)
    else:
        logger.critical(message, module=module, **kwargs)


def log_debug(message: str, module: str = "app", **kwargs: LogField) -> None:
    """记录调试级别日志, 仅在启用调试日志时记录."""
    if not should_log_debug():
        return
    get_logger("app").debug(message, module=module, **kwargs)


def get_system_logger() -> structlog.stdlib.BoundLogger:
    return get_logger("system")


def enhanced_error_handler(
    error: Exception,
    context: ErrorContext | None = None,
    *,
    extra: dict[str, object] | None = None,
) -> ErrorPayload:
    """增强的错误处理器.

    将异常转换为结构化的错误响应,包含错误分类、严重级别和建议.

    Returns:
        结构化的错误响应字典,包含 error_id/category/severity/message_code/message 等字段.

    """
    context = context or ErrorContext(error)
    context.ensure_request()

    metadata = derive_error_metadata(error)
    payload: ErrorPayload = {
        "error": True,
        "error_id": context.error_id,
        "category": metadata.category.value,
        "severity": metadata.severity.value,
        "message_code": metadata.message_key,
        "message": metadata.message,
        "timestamp": context.timestamp.isoformat(),
        "recoverable": metadata.recoverable,
        "suggestions": get_error_suggestions(metadata.category),
        "context": build_public_context(context),
    }
    if extra:
        payload["extra"] = dict(extra)

    _log_enhanced_error(error, metadata, payload)
    return payload


def _log_enhanced_error(error: Exception, metadata: ErrorMetadata, payload: ErrorPayload) -> None:
    """根据严重度输出增强错误."""
    log_kwargs: dict[str, object] = {
        "error_id": payload["error_id"],
        "category": payload["category"],
        "severity": payload["severity"],
        "context": payload.get("context"),
    }
    if "extra" in payload:
        log_kwargs["extra"] = payload["extra"]

    message_text = str(payload.get("message", ""))
    if metadata.severity == ErrorSeverity.CRITICAL:
        log_critical(message_text, module="error_handler", exception=error, **log_kwargs)
    elif metadata.severity == ErrorSeverity.HIGH:
        log_error(message_text, module="error_handler", exception=error, **log_kwargs)
    else:
        log_warning(message_text, module="error_handler", exception=error, **log_kwargs)


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "configure_structlog",
    "enhanced_error_handler",
    "get_logger",
    "get_system_logger",
    "log_critical",
    "log_debug",
    "log_error",
    "log_info",
    "log_warning",
    "should_log_debug",
]
