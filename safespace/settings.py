"""SafeSpace - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失关键密钥会直接抛出 ValueError.
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from safespace.constants.system_constants import LogLevel
from safespace.schemas.constraints import ExtraPolicy

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_NAME = "SafeSpace"
APP_VERSION = "1.0.0"
DEFAULT_ENVIRONMENT = "development"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_CONTENT_LENGTH_BYTES = 1 * 1024 * 1024
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")
DEFAULT_API_V1_DOCS_ENABLED = True
DEFAULT_SCHEMA_EXTRA_FIELDS = "ignore"

_LOG_LEVELS = frozenset(level.value for level in LogLevel)
_SCHEMA_EXTRA_FIELDS = {"ignore", "forbid", "allow"}


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # `CORS_ORIGINS` 约定使用逗号分隔, 关闭自动 JSON 解码, 统一交由 validator 解析.
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    max_content_length_bytes: int = Field(
        default=DEFAULT_MAX_CONTENT_LENGTH_BYTES, validation_alias="MAX_CONTENT_LENGTH"
    )

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS, validation_alias="CORS_ORIGINS")

    api_v1_docs_enabled: bool = Field(default=DEFAULT_API_V1_DOCS_ENABLED, validation_alias="API_V1_DOCS_ENABLED")

    # 未声明字段策略: ignore(丢弃) / forbid(拒绝) / allow(透传)
    schema_extra_fields: str = Field(default=DEFAULT_SCHEMA_EXTRA_FIELDS, validation_alias="SCHEMA_EXTRA_FIELDS")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_csv_values(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return ()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                return tuple(item for item in (str(v).strip() for v in parsed) if item)
            return _parse_csv(raw)
        if isinstance(value, (list, tuple, set)):
            items = []
            for item in value:
                text = str(item).strip()
                if text:
                    items.append(text)
            return tuple(items)
        return value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def schema_extra_policy(self) -> ExtraPolicy:
        """全局未知字段策略."""
        return ExtraPolicy(self.schema_extra_fields.lower())

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes,
            "LOG_LEVEL": self.log_level.upper(),
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "CORS_ORIGINS": ",".join(self.cors_origins),
            "API_V1_DOCS_ENABLED": self.api_v1_docs_enabled,
            "SCHEMA_EXTRA_FIELDS": self.schema_extra_fields.lower(),
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._apply_api_docs_default(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _apply_api_docs_default(self, environment_normalized: str) -> None:
        if environment_normalized != "production":
            return
        if "api_v1_docs_enabled" in self.model_fields_set:
            return
        object.__setattr__(self, "api_v1_docs_enabled", False)

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        checks: list[tuple[str, bool]] = [
            ("MAX_CONTENT_LENGTH 必须为正整数(字节)", self.max_content_length_bytes <= 0),
            ("LOG_LEVEL 仅支持 DEBUG/INFO/WARNING/ERROR/CRITICAL", self.log_level.upper() not in _LOG_LEVELS),
            (
                "SCHEMA_EXTRA_FIELDS 仅支持 ignore/forbid/allow",
                self.schema_extra_fields.lower() not in _SCHEMA_EXTRA_FIELDS,
            ),
            ("生产环境 CORS_ORIGINS 不允许使用 *", self.is_production and "*" in self.cors_origins),
        ]
        errors = [message for message, condition in checks if condition]
        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
