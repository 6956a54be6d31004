"""SafeSpace - Flask 应用初始化.

写路径请求体校验服务: 每个路由绑定一个命名 schema, 请求体在进入视图前
由校验网关统一判定, 失败时返回 400 校验响应.
"""

from __future__ import annotations

import logging
from typing import Final

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_cors import CORS

from safespace.api.v1 import create_api_v1_blueprint
from safespace.api.v1.resources.decorators import VALIDATION_GATE_EXTENSION
from safespace.constants import HttpHeaders
from safespace.infra.logging.request_middleware import register_request_logging
from safespace.schemas.registry import application_registry
from safespace.schemas.validation import ValidationGate
from safespace.settings import Settings
from safespace.utils.response_utils import unified_error_response
from safespace.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    get_system_logger,
)

API_V1_PREFIX: Final = "/api/v1"

cors = CORS()


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    Raises:
        UnknownSchemaError: 某个路由绑定了未注册的 schema.

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 装配校验网关; registry 启动时构造一次, 之后只读
    gate = configure_validation(app, resolved_settings)

    # 注册请求上下文与 wide event
    register_request_logging(app)

    # 注册蓝图
    app.register_blueprint(create_api_v1_blueprint(resolved_settings, gate), url_prefix=API_V1_PREFIX)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册全局错误处理器
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        payload, status_code = unified_error_response(error, context=ErrorContext(error, request))
        return jsonify(payload), status_code

    get_system_logger().info(
        "应用初始化完成",
        module="system",
        schemas=list(gate.registry.names()),
        extra_policy=resolved_settings.schema_extra_policy.value,
    )
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置并注册基础钩子."""
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化 CORS 扩展."""
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": list(settings.cors_origins),
                "methods": ["GET", "POST", "PUT", "OPTIONS"],
                "allow_headers": [HttpHeaders.CONTENT_TYPE, HttpHeaders.X_REQUEST_ID],
                "expose_headers": [HttpHeaders.X_REQUEST_ID],
                "supports_credentials": True,
            },
        },
    )


def configure_validation(app: Flask, settings: Settings) -> ValidationGate:
    """构造 schema registry 与校验网关, 挂到 app.extensions."""
    gate = ValidationGate(application_registry(settings.schema_extra_policy))
    app.extensions[VALIDATION_GATE_EXTENSION] = gate
    return gate
