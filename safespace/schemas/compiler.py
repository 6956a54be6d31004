"""把声明式 schema 编译为 pydantic model.

pydantic 负责遍历字段、识别缺失与未知字段、收集全部错误; 每个字段的具体约束
交给 `check_value`. 编译发生在 registry 构造时, 请求期间只做 model_validate.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from copy import deepcopy
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model

from safespace.schemas.checks import check_value
from safespace.schemas.constraints import ExtraPolicy, FieldConstraint, FieldKind, Schema


def _attribute_name(index: int) -> str:
    # payload 字段名只作为 alias 使用, 避免与 BaseModel 自身属性冲突
    return f"f{index}"


def _field_validator(constraint: FieldConstraint) -> Callable[[object], object]:
    def _validate(value: object) -> object:
        return check_value(constraint, value)

    return _validate


def _field_definition(constraint: FieldConstraint) -> Any:  # noqa: ANN401
    if constraint.required:
        return Field(alias=constraint.name)
    if constraint.has_default:
        default = constraint.default
        return Field(default_factory=lambda: deepcopy(default), alias=constraint.name)
    return Field(default=None, alias=constraint.name)


def _build_model(model_name: str, fields: tuple[FieldConstraint, ...], extra: ExtraPolicy) -> type[BaseModel]:
    definitions: dict[str, Any] = {}
    for index, constraint in enumerate(fields):
        if constraint.kind is FieldKind.OBJECT:
            base: Any = _build_model(f"{model_name}__{constraint.name}", constraint.fields, extra)
        else:
            base = Any
        annotation = Annotated[base, BeforeValidator(_field_validator(constraint))]
        definitions[_attribute_name(index)] = (annotation, _field_definition(constraint))

    config = ConfigDict(extra=extra.value, hide_input_in_errors=True)
    return create_model(model_name, __config__=config, **definitions)


def _dump(instance: BaseModel, fields: tuple[FieldConstraint, ...]) -> dict[str, object]:
    result: dict[str, object] = {}
    provided = instance.model_fields_set
    for index, constraint in enumerate(fields):
        attribute = _attribute_name(index)
        if attribute not in provided and not constraint.has_default:
            continue
        value = getattr(instance, attribute)
        if isinstance(value, BaseModel):
            value = _dump(value, constraint.fields)
        result[constraint.name] = value
    if instance.model_extra:
        result.update(deepcopy(instance.model_extra))
    return result


@dataclass(frozen=True, slots=True)
class CompiledSchema:
    """schema 与其编译后的校验 model."""

    schema: Schema
    model: type[BaseModel]

    @property
    def name(self) -> str:
        return self.schema.name

    def validate(self, payload: Mapping[str, object]) -> dict[str, object]:
        """执行校验并返回规范化 payload.

        Raises:
            pydantic.ValidationError: 存在任一字段不满足约束.

        """
        instance = self.model.model_validate(payload)
        return _dump(instance, self.schema.fields)


def compile_schema(schema: Schema) -> CompiledSchema:
    """编译单个 schema."""
    return CompiledSchema(schema=schema, model=_build_model(schema.name, schema.fields, schema.extra))


__all__ = ["CompiledSchema", "compile_schema"]
