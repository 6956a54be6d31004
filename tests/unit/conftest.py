# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供 registry、校验网关与 monkeypatch 相关的通用 fixtures。
"""

import pytest

from safespace.schemas.registry import application_registry, default_registry
from safespace.schemas.validation import ValidationGate


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    - `.env` 不应改变未知字段策略
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("SCHEMA_EXTRA_FIELDS", "ignore")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)


@pytest.fixture(scope="session")
def registry():
    """默认三张表的 registry(整个测试会话复用, 只读)."""
    return default_registry()


@pytest.fixture(scope="session")
def gate():
    """应用 registry 上的校验网关."""
    return ValidationGate(application_registry())


@pytest.fixture
def valid_user() -> dict[str, object]:
    return {
        "name": "Asha Verma",
        "email": "asha@example.com",
        "password": "secret1",
    }
