"""SafeSpace - 统一响应工具.

提供统一的成功/错误响应结构,避免在业务层散落 JSON 拼装逻辑.
校验失败的 400 响应不走这里, 见 `safespace.schemas.validation.render_rejection`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from flask import Response, jsonify

from safespace.api.error_mapping import map_exception_to_status
from safespace.constants import HttpStatus
from safespace.constants.system_constants import SuccessMessages
from safespace.utils.structlog_config import ErrorContext, enhanced_error_handler

if TYPE_CHECKING:
    from collections.abc import Mapping


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[dict[str, object], int]:
    """生成统一的成功响应载荷.

    Args:
        data: 响应数据,可选.
        message: 成功消息,可选.
        status: HTTP 状态码,默认为 200.
        meta: 元数据,可选.

    Returns:
        (响应载荷字典, HTTP 状态码).

    """
    payload: dict[str, object] = {
        "success": True,
        "error": False,
        "message": str(message) if message is not None else SuccessMessages.OPERATION_SUCCESS,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if data is not None:
        payload["data"] = data
    if meta:
        payload["meta"] = dict(meta)
    return payload, status


def unified_error_response(
    error: BaseException | Exception,
    *,
    status_code: int | None = None,
    extra: Mapping[str, object] | None = None,
    context: ErrorContext | None = None,
) -> tuple[dict[str, object], int]:
    """生成统一的错误响应载荷, 状态码缺省时根据异常类型映射."""
    safe_error = error if isinstance(error, Exception) else Exception(str(error))
    context = context or ErrorContext(safe_error)
    payload = enhanced_error_handler(safe_error, context, extra=dict(extra) if extra else None)
    final_status = status_code or map_exception_to_status(safe_error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    payload.setdefault("success", False)
    return payload, final_status


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status


def jsonify_unified_error(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的错误响应便捷函数."""
    payload, status = unified_error_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status


__all__ = [
    "jsonify_unified_error",
    "jsonify_unified_success",
    "unified_error_response",
    "unified_success_response",
]
