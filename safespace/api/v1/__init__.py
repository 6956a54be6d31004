"""API v1 (Flask-RESTX).

该包仅承载对外 JSON API 的路由层与 OpenAPI 文档能力.
写路径的请求体在进入视图前由校验网关处理.
"""

from __future__ import annotations

from typing import cast

from flask import Blueprint, Response, jsonify
from flask_restx import Api

from safespace.api.v1.api import SafeSpaceApi
from safespace.api.v1.namespaces.auth import ns as auth_ns
from safespace.api.v1.namespaces.health import ns as health_ns
from safespace.api.v1.namespaces.users import ns as users_ns
from safespace.api.v1.resources.decorators import bound_schema_name
from safespace.schemas.validation import ValidationGate
from safespace.settings import Settings


def create_api_v1_blueprint(settings: Settings, gate: ValidationGate) -> Blueprint:
    """创建并配置 `/api/v1` Blueprint.

    - Swagger UI: `/api/v1/docs`(可配置关闭)
    - OpenAPI JSON: `/api/v1/openapi.json`
    - 每个路由绑定的 schema 必须在 gate 的 registry 中注册, 否则抛出 UnknownSchemaError
    """
    blueprint = Blueprint("api_v1", __name__)

    docs_path = "/docs" if settings.api_v1_docs_enabled else cast(str, False)
    api = SafeSpaceApi(
        blueprint,
        title=settings.app_name,
        version=settings.app_version,
        doc=docs_path,
    )

    api.add_namespace(auth_ns, path="/auth")
    api.add_namespace(users_ns, path="/users")
    api.add_namespace(health_ns, path="/health")

    for schema_name in collect_bound_schemas(api):
        gate.ensure(schema_name)

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(api.__schema__), 200

    return blueprint


def collect_bound_schemas(api: Api) -> tuple[str, ...]:
    """收集 Api 下所有资源方法上绑定的 schema 名称(按注册顺序, 去重)."""
    names: dict[str, None] = {}
    for namespace in api.namespaces:
        for route in namespace.resources:
            resource = route.resource
            for method in sorted(getattr(resource, "methods", None) or ()):
                view = getattr(resource, method.lower(), None)
                if view is None:
                    continue
                schema_name = bound_schema_name(view)
                if schema_name is not None:
                    names.setdefault(schema_name)
    return tuple(names)
