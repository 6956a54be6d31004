"""Schema Registry: 按名称查找不可变的 schema.

约定:
- registry 在应用启动时构造一次, 之后只读, 显式传给校验网关.
- 未知字段策略默认 ``ignore``: 未声明字段从规范化 payload 中静默丢弃,
  不会传到下游, 也不会导致请求被拒绝. 可通过 ``extra_policy`` 统一覆写.
- 查找未注册的名称抛出 `UnknownSchemaError`, 属于装配期缺陷.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from safespace.core.exceptions import UnknownSchemaError
from safespace.schemas.compiler import CompiledSchema, compile_schema
from safespace.schemas.constraints import ExtraPolicy, Schema
from safespace.schemas.users import AUTH_SCHEMAS, DEFAULT_SCHEMAS


class SchemaRegistry:
    """命名 schema 的只读集合, 同时持有每个 schema 的编译结果."""

    __slots__ = ("_compiled", "_schemas")

    def __init__(self, schemas: Iterable[Schema]) -> None:
        resolved: dict[str, Schema] = {}
        for schema in schemas:
            if schema.name in resolved:
                raise ValueError(f"重复注册的 schema: {schema.name}")
            resolved[schema.name] = schema
        self._schemas: Mapping[str, Schema] = MappingProxyType(resolved)
        self._compiled: Mapping[str, CompiledSchema] = MappingProxyType(
            {name: compile_schema(schema) for name, schema in resolved.items()},
        )

    def get(self, name: str) -> Schema:
        """按名称返回 schema.

        Raises:
            UnknownSchemaError: 名称未注册.

        """
        try:
            return self._schemas[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def compiled(self, name: str) -> CompiledSchema:
        """按名称返回编译后的 schema."""
        try:
            return self._compiled[name]
        except KeyError:
            raise UnknownSchemaError(name) from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[Schema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"SchemaRegistry({', '.join(self._schemas)})"


def build_registry(*schemas: Schema, extra_policy: ExtraPolicy | None = None) -> SchemaRegistry:
    """构造 registry, 可选地统一覆写未知字段策略."""
    if extra_policy is not None:
        schemas = tuple(schema.with_extra(extra_policy) for schema in schemas)
    return SchemaRegistry(schemas)


def default_registry(extra_policy: ExtraPolicy | None = None) -> SchemaRegistry:
    """默认的三张表: user / signup / profile_update."""
    return build_registry(*DEFAULT_SCHEMAS, extra_policy=extra_policy)


def application_registry(extra_policy: ExtraPolicy | None = None) -> SchemaRegistry:
    """应用使用的 registry: 默认三张表加认证相关的补充表."""
    return build_registry(*DEFAULT_SCHEMAS, *AUTH_SCHEMAS, extra_policy=extra_policy)


def application_schema_names() -> frozenset[str]:
    """应用 registry 中会出现的全部 schema 名称, 不触发编译."""
    return frozenset(schema.name for schema in (*DEFAULT_SCHEMAS, *AUTH_SCHEMAS))


__all__ = ["SchemaRegistry", "application_registry", "application_schema_names", "build_registry", "default_registry"]
