"""写路径 payload 的声明式 schema 与校验网关."""

from safespace.schemas.constraints import ExtraPolicy, FieldConstraint, FieldKind, Schema, ViolationKind
from safespace.schemas.registry import SchemaRegistry, application_registry, build_registry, default_registry

__all__ = [
    "ExtraPolicy",
    "FieldConstraint",
    "FieldKind",
    "Schema",
    "SchemaRegistry",
    "ViolationKind",
    "application_registry",
    "build_registry",
    "default_registry",
]
