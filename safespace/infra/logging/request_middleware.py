"""请求级别的上下文注入与 wide event 发射(Infra).

目标：
- 让 request_id 通过 contextvars 在整个请求生命周期可用（用于日志关联与错误封套）。
- 在请求完成时发射一条 canonical/wide event：每请求一次、字段稳定、可聚合。
"""

from __future__ import annotations

import re
import time
from contextlib import suppress
from typing import TYPE_CHECKING
from uuid import uuid4

from flask import Flask, g, request

from safespace.constants import HttpHeaders
from safespace.utils.logging.context_vars import request_id_var, schema_name_var
from safespace.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from werkzeug.wrappers.response import Response

_REQUEST_ID_MAX_LEN = 128
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}$")


def _generate_request_id() -> str:
    return f"req_{uuid4().hex}"


def _sanitize_request_id(raw_value: str | None) -> str | None:
    if not raw_value:
        return None
    value = raw_value.strip()
    if not value or len(value) > _REQUEST_ID_MAX_LEN:
        return None
    if not _REQUEST_ID_PATTERN.match(value):
        return None
    return value


def register_request_logging(app: Flask) -> None:
    """注册请求级别的上下文注入与 wide event."""

    @app.before_request
    def _bind_request_context() -> None:
        incoming_request_id = _sanitize_request_id(request.headers.get(HttpHeaders.X_REQUEST_ID))
        request_id = incoming_request_id or _generate_request_id()

        # 保存 token，确保 teardown 时 reset（避免 contextvars 在同线程后续请求间泄漏）。
        g._request_id_token = request_id_var.set(request_id)
        g.request_id = request_id
        url_rule = getattr(request, "url_rule", None)
        g.route = getattr(url_rule, "rule", None) if url_rule else None
        g._request_start_perf = time.perf_counter()

    @app.after_request
    def _emit_request_wide_event(response: Response) -> Response:
        request_id = request_id_var.get() or getattr(g, "request_id", None) or _generate_request_id()
        response.headers.setdefault(HttpHeaders.X_REQUEST_ID, request_id)

        duration_ms = None
        started_at = getattr(g, "_request_start_perf", None)
        if isinstance(started_at, (float, int)):
            duration_ms = round((time.perf_counter() - float(started_at)) * 1000)

        status_code = int(getattr(response, "status_code", 0) or 0)
        outcome = "success" if status_code and status_code < 400 else "error"

        get_logger("http").info(
            "http_request_completed",
            module="http",
            action=f"{request.method} {request.path}",
            status_code=status_code,
            outcome=outcome,
            duration_ms=duration_ms,
            route=getattr(g, "route", None),
            schema=schema_name_var.get(),
        )
        return response

    @app.teardown_request
    def _reset_request_context(_exc: BaseException | None) -> None:
        # reset() 只接受 Token，因此必须从 g 取回；异常/提前返回路径下可能缺失。
        request_id_token = getattr(g, "_request_id_token", None)
        with suppress(LookupError, RuntimeError, ValueError):
            if request_id_token is not None:
                request_id_var.reset(request_id_token)
                g._request_id_token = None
        schema_token = getattr(g, "_schema_name_token", None)
        with suppress(LookupError, RuntimeError, ValueError):
            if schema_token is not None:
                schema_name_var.reset(schema_token)
                g._schema_name_token = None


__all__ = ["register_request_logging"]
