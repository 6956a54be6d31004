"""Base Resource helpers."""

from __future__ import annotations

from collections.abc import Mapping

from flask import Response
from flask_restx import Resource

from safespace.constants import HttpStatus
from safespace.utils.response_utils import jsonify_unified_success
from safespace.utils.structlog_config import log_info

SECRET_FIELD_MARKER = "password"


class BaseResource(Resource):
    """统一成功封套."""

    def success(
        self,
        data: object | None = None,
        message: object | None = None,
        *,
        status: int = HttpStatus.OK,
        meta: Mapping[str, object] | None = None,
    ) -> tuple[Response, int]:
        return jsonify_unified_success(data=data, message=message, status=status, meta=meta)

    def accepted(
        self,
        payload: Mapping[str, object],
        message: object,
        *,
        schema: str,
        status: int = HttpStatus.OK,
    ) -> tuple[Response, int]:
        """回执已通过校验的 payload, 密码类字段不回显."""
        log_info("请求体校验通过", module="api", schema=schema)
        return self.success(
            data={"schema": schema, "payload": redact_secrets(payload)},
            message=message,
            status=status,
        )


def redact_secrets(payload: Mapping[str, object]) -> dict[str, object]:
    """移除名称包含 password 的字段(含嵌套对象)."""
    redacted: dict[str, object] = {}
    for key, value in payload.items():
        if SECRET_FIELD_MARKER in key.lower():
            continue
        if isinstance(value, Mapping):
            redacted[key] = redact_secrets(value)
        else:
            redacted[key] = value
    return redacted
