"""声明式字段约束与 schema 定义.

约定:
- schema 是进程级不可变配置: 启动时构造, 之后只读, 不依赖模块级单例做查找.
- 字段约束只描述 "是什么", 校验逻辑集中在 `safespace.schemas.checks`.
- 字段顺序即声明顺序, 失败信息按该顺序输出.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final


class FieldKind(Enum):
    """字段的基础类型."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CHOICE = "choice"
    SEQUENCE = "sequence"
    OBJECT = "object"


class ViolationKind(Enum):
    """单个字段失败的分类."""

    MISSING_REQUIRED = "missing-required"
    TYPE_MISMATCH = "type-mismatch"
    OUT_OF_BOUNDS = "out-of-bounds"
    PATTERN_MISMATCH = "pattern-mismatch"
    NOT_IN_ENUMERATION = "not-in-enumeration"
    UNEXPECTED_FIELD = "unexpected-field"


class ExtraPolicy(Enum):
    """payload 中未声明字段的处理策略."""

    IGNORE = "ignore"
    FORBID = "forbid"
    ALLOW = "allow"


# 规则名 -> 失败分类; messages 按规则名覆写默认文案.
RULE_KINDS: Final[Mapping[str, ViolationKind]] = MappingProxyType(
    {
        "required": ViolationKind.MISSING_REQUIRED,
        "type": ViolationKind.TYPE_MISMATCH,
        "items": ViolationKind.TYPE_MISMATCH,
        "min_length": ViolationKind.OUT_OF_BOUNDS,
        "max_length": ViolationKind.OUT_OF_BOUNDS,
        "minimum": ViolationKind.OUT_OF_BOUNDS,
        "maximum": ViolationKind.OUT_OF_BOUNDS,
        "pattern": ViolationKind.PATTERN_MISMATCH,
        "choices": ViolationKind.NOT_IN_ENUMERATION,
    },
)


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


@dataclass(frozen=True, slots=True)
class FieldConstraint:
    """单个字段的约束.

    Attributes:
        name: payload 中的字段名.
        kind: 字段基础类型.
        label: 错误文案中使用的展示名, 缺省时使用 name.
        required: 是否必填(存在、非 null, 文本非空白).
        min_length: 文本/序列的最小长度.
        max_length: 文本/序列的最大长度.
        minimum: 数值下界(含).
        maximum: 数值上界(含).
        pattern: 文本需要整体匹配的正则.
        choices: 枚举字段的允许值(大小写不敏感, 输出规范写法).
        items: 序列元素的基础类型.
        fields: 嵌套对象的子字段约束.
        default: 缺省值, 仅在字段缺失时填充.
        messages: 按规则名覆写的错误文案.

    """

    name: str
    kind: FieldKind
    label: str | None = None
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None
    pattern: str | None = None
    choices: tuple[str, ...] = ()
    items: FieldKind | None = None
    fields: tuple[FieldConstraint, ...] = ()
    default: object = NO_DEFAULT
    messages: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if self.required and self.has_default:
            raise ValueError(f"字段 {self.name} 不能同时为必填且带缺省值")
        if self.kind is FieldKind.CHOICE and not self.choices:
            raise ValueError(f"枚举字段 {self.name} 缺少允许值")
        if self.kind is FieldKind.OBJECT and not self.fields:
            raise ValueError(f"对象字段 {self.name} 缺少子字段")
        unknown_rules = set(self.messages) - set(RULE_KINDS)
        if unknown_rules:
            raise ValueError(f"字段 {self.name} 存在未知的文案规则: {', '.join(sorted(unknown_rules))}")
        _ensure_unique_names(self.fields, owner=self.name)
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def message_for(self, rule: str, fallback: str) -> str:
        """返回规则对应的文案, 未覆写时使用 fallback."""
        return self.messages.get(rule, fallback)

    def child(self, name: str) -> FieldConstraint | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None


@dataclass(frozen=True, slots=True)
class Schema:
    """一个请求形状: 有序的字段约束集合."""

    name: str
    fields: tuple[FieldConstraint, ...]
    extra: ExtraPolicy = ExtraPolicy.IGNORE
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("schema 名称不能为空")
        _ensure_unique_names(self.fields, owner=self.name)

    def __iter__(self) -> Iterator[FieldConstraint]:
        return iter(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.fields if item.required)

    def get(self, name: str) -> FieldConstraint | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def resolve(self, path: tuple[str | int, ...]) -> FieldConstraint | None:
        """按字段路径查找(嵌套)约束, 路径中的序列下标会被跳过."""
        current: FieldConstraint | None = None
        candidates = self.fields
        for segment in path:
            if isinstance(segment, int):
                continue
            current = next((item for item in candidates if item.name == segment), None)
            if current is None:
                return None
            candidates = current.fields
        return current

    def position(self, name: str) -> int:
        """字段的声明位置; 未声明字段排在最后."""
        names = self.field_names
        return names.index(name) if name in names else len(names)

    def with_extra(self, policy: ExtraPolicy) -> Schema:
        return dataclasses.replace(self, extra=policy)


def _ensure_unique_names(fields: tuple[FieldConstraint, ...], *, owner: str) -> None:
    seen: set[str] = set()
    for item in fields:
        if item.name in seen:
            raise ValueError(f"{owner} 中存在重复字段: {item.name}")
        seen.add(item.name)


__all__ = [
    "NO_DEFAULT",
    "RULE_KINDS",
    "ExtraPolicy",
    "FieldConstraint",
    "FieldKind",
    "Schema",
    "ViolationKind",
]
