"""API v1 decorators.

说明:
- 写路径的 schema 名称按路由绑定, 不从 payload 推断.
- 校验失败直接返回 400 校验响应, 视图函数不会执行.
- schema 名称拼写错误在装饰阶段即抛出 UnknownSchemaError, 阻止路由注册.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, Final, ParamSpec, TypeVar

from flask import Response, current_app, g, jsonify, request

from safespace.constants import HttpStatus
from safespace.core.exceptions import UnknownSchemaError
from safespace.schemas.registry import application_schema_names
from safespace.schemas.validation import Rejected, ValidationGate, render_rejection
from safespace.utils.logging.context_vars import schema_name_var

P = ParamSpec("P")
R = TypeVar("R")

VALIDATION_GATE_EXTENSION: Final = "safespace.validation_gate"
VALIDATED_SCHEMA_ATTR: Final = "__validated_schema__"


def get_validation_gate() -> ValidationGate:
    """返回当前应用装配的校验网关."""
    gate = current_app.extensions.get(VALIDATION_GATE_EXTENSION)
    if not isinstance(gate, ValidationGate):
        raise RuntimeError("ValidationGate 未初始化, 请通过 create_app 创建应用")
    return gate


def read_json_body() -> object:
    """读取请求体.

    空请求体视为 ``{}``; 无法解析的 JSON 返回 None, 交由网关判定为非对象请求体.
    """
    raw = request.get_data(cache=True)
    if not raw or not raw.strip():
        return {}
    return request.get_json(force=True, silent=True)


def validate_body(schema_name: str) -> Callable[[Callable[P, R]], Callable[P, R | tuple[Response, int]]]:
    """按命名 schema 校验请求体(API v1 专用).

    通过时规范化后的 payload 写入 ``g.validated_body``, 并以关键字参数 ``payload`` 传给视图.

    Raises:
        UnknownSchemaError: schema 名称未注册(装饰阶段).

    """
    if schema_name not in application_schema_names():
        raise UnknownSchemaError(schema_name)

    def decorator(func: Callable[P, R]) -> Callable[P, R | tuple[Response, int]]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | tuple[Response, int]:
            g._schema_name_token = schema_name_var.set(schema_name)
            outcome = get_validation_gate().validate(schema_name, read_json_body())
            if isinstance(outcome, Rejected):
                return jsonify(render_rejection(outcome)), HttpStatus.BAD_REQUEST
            g.validated_body = outcome.payload
            kwargs["payload"] = outcome.payload
            return func(*args, **kwargs)

        setattr(wrapper, VALIDATED_SCHEMA_ATTR, schema_name)
        return wrapper

    return decorator


def bound_schema_name(view: Callable[..., Any]) -> str | None:
    """返回视图上通过 validate_body 绑定的 schema 名称."""
    value = getattr(view, VALIDATED_SCHEMA_ATTR, None)
    return value if isinstance(value, str) else None
