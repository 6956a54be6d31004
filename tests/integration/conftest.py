# tests/integration/conftest.py
"""集成测试专用 fixtures.

通过 create_app 完整装配应用(读取真实环境变量与可选 `.env`)。
"""

import pytest

from safespace import create_app


@pytest.fixture(scope="session")
def app():
    """创建测试应用实例（整个测试会话复用）."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture(scope="function")
def client(app):
    """测试客户端，每个测试函数独立."""
    return app.test_client()
