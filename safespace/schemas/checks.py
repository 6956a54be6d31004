"""按字段类型分派的通用约束检查.

`check_value` 只处理单个字段, 失败时抛出 `ConstraintError`; 字段之间互不影响,
多字段错误的收集与排序由校验引擎(pydantic)和校验网关负责.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence
from functools import lru_cache

from safespace.schemas.constraints import RULE_KINDS, FieldConstraint, FieldKind, ViolationKind

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_STRING_LIKE_TYPES = (str, bytes, bytearray)

_TYPE_NAMES: dict[FieldKind, str] = {
    FieldKind.TEXT: "a string",
    FieldKind.NUMBER: "a number",
    FieldKind.BOOLEAN: "a boolean",
    FieldKind.CHOICE: "a string",
    FieldKind.SEQUENCE: "a list",
    FieldKind.OBJECT: "an object",
}


class ConstraintError(ValueError):
    """字段约束不满足, 携带规则名与失败分类."""

    def __init__(self, message: str, *, rule: str) -> None:
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.kind: ViolationKind = RULE_KINDS[rule]


@lru_cache(maxsize=64)
def _compiled_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def _fail(constraint: FieldConstraint, rule: str, fallback: str) -> ConstraintError:
    return ConstraintError(constraint.message_for(rule, fallback), rule=rule)


def _type_error(constraint: FieldConstraint) -> ConstraintError:
    label = constraint.display_name
    return _fail(constraint, "type", f"{label} must be {_TYPE_NAMES[constraint.kind]}")


def _check_length(constraint: FieldConstraint, size: int, unit: str) -> None:
    label = constraint.display_name
    if constraint.min_length is not None and size < constraint.min_length:
        raise _fail(constraint, "min_length", f"{label} must contain at least {constraint.min_length} {unit}")
    if constraint.max_length is not None and size > constraint.max_length:
        raise _fail(constraint, "max_length", f"{label} must contain at most {constraint.max_length} {unit}")


def _check_text(constraint: FieldConstraint, value: object) -> str:
    if not isinstance(value, str):
        raise _type_error(constraint)
    if constraint.required and not value.strip():
        raise _fail(constraint, "required", f"{constraint.display_name} is required")
    _check_length(constraint, len(value), "character(s)")
    if constraint.pattern is not None and not _compiled_pattern(constraint.pattern).fullmatch(value):
        raise _fail(constraint, "pattern", f"{constraint.display_name} has an invalid format")
    return value


def _coerce_number(constraint: FieldConstraint, value: object) -> int | float:
    # bool 是 int 的子类, 需先排除
    if isinstance(value, bool):
        raise _type_error(constraint)
    if isinstance(value, (int, float)):
        number: int | float = value
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise _type_error(constraint)
        # 仅接受 ASCII 数字; int() 超出位数上限时同样按类型错误处理
        if not _DECIMAL_PATTERN.match(raw):
            raise _type_error(constraint)
        try:
            number = int(raw, 10) if _INTEGER_PATTERN.match(raw) else float(raw)
        except ValueError:
            raise _type_error(constraint) from None
    else:
        raise _type_error(constraint)
    if isinstance(number, float) and not math.isfinite(number):
        raise _type_error(constraint)
    return number


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _check_number(constraint: FieldConstraint, value: object) -> int | float:
    number = _coerce_number(constraint, value)
    label = constraint.display_name
    if constraint.minimum is not None and number < constraint.minimum:
        raise _fail(constraint, "minimum", f"{label} must be at least {_format_bound(constraint.minimum)}")
    if constraint.maximum is not None and number > constraint.maximum:
        raise _fail(constraint, "maximum", f"{label} must be at most {_format_bound(constraint.maximum)}")
    return number


def _check_boolean(constraint: FieldConstraint, value: object) -> bool:
    if not isinstance(value, bool):
        raise _type_error(constraint)
    return value


def _check_choice(constraint: FieldConstraint, value: object) -> str:
    if not isinstance(value, str):
        raise _type_error(constraint)
    canonical = {choice.lower(): choice for choice in constraint.choices}
    matched = canonical.get(value.lower())
    if matched is None:
        allowed = ", ".join(constraint.choices)
        raise _fail(constraint, "choices", f"{constraint.display_name} must be one of: {allowed}")
    return matched


def _check_sequence(constraint: FieldConstraint, value: object) -> list[object]:
    if not isinstance(value, Sequence) or isinstance(value, _STRING_LIKE_TYPES):
        raise _type_error(constraint)
    items = list(value)
    _check_length(constraint, len(items), "item(s)")
    if constraint.items is FieldKind.TEXT:
        for index, item in enumerate(items):
            if not isinstance(item, str):
                raise _fail(
                    constraint,
                    "items",
                    f"{constraint.display_name} must contain only strings (item {index} is not)",
                )
    return items


def _check_object(constraint: FieldConstraint, value: object) -> Mapping[str, object]:
    # 子字段由嵌套 model 逐一校验, 这里只确认形状
    if not isinstance(value, Mapping):
        raise _type_error(constraint)
    return value


_CHECKERS: dict[FieldKind, Callable[[FieldConstraint, object], object]] = {
    FieldKind.TEXT: _check_text,
    FieldKind.NUMBER: _check_number,
    FieldKind.BOOLEAN: _check_boolean,
    FieldKind.CHOICE: _check_choice,
    FieldKind.SEQUENCE: _check_sequence,
    FieldKind.OBJECT: _check_object,
}


def check_value(constraint: FieldConstraint, value: object) -> object:
    """校验并规范化单个已提供的字段值.

    Args:
        constraint: 字段约束.
        value: payload 中显式提供的值(字段缺失不会调用本函数).

    Returns:
        规范化后的值(数值字符串转数值、枚举转规范写法).

    Raises:
        ConstraintError: 值不满足约束.

    """
    if value is None:
        if constraint.required:
            raise _fail(constraint, "required", f"{constraint.display_name} is required")
        raise _type_error(constraint)
    return _CHECKERS[constraint.kind](constraint, value)


__all__ = ["ConstraintError", "check_value"]
