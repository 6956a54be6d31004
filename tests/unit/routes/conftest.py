# tests/unit/routes/conftest.py
"""API 契约测试专用 fixtures.

提供 app 与 test_client。
"""

import pytest

from safespace import create_app
from safespace.settings import Settings


@pytest.fixture(scope="function")
def app(monkeypatch):
    """创建测试应用实例."""
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SCHEMA_EXTRA_FIELDS", "ignore")

    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()
