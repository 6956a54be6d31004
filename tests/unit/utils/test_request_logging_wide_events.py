"""请求级别日志注入 + wide event 的单元测试门禁."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from safespace import create_app
from safespace.settings import Settings
from safespace.utils.logging.context_vars import request_id_var, schema_name_var


@pytest.fixture
def app():
    app = create_app(settings=Settings.load())
    app.config["TESTING"] = True
    return app


@pytest.mark.unit
def test_request_id_is_propagated_and_wide_event_emitted(app) -> None:
    client = app.test_client()

    with capture_logs() as entries:
        response = client.get("/api/v1/health/ping", headers={"X-Request-ID": "req_test_123"})

    assert response.status_code == 200
    assert response.headers.get("X-Request-ID") == "req_test_123"

    # teardown_request 应 reset contextvars（避免泄漏到后续请求/测试）
    assert request_id_var.get() is None

    wide_entry = next(entry for entry in entries if entry.get("event") == "http_request_completed")
    assert wide_entry["module"] == "http"
    assert wide_entry["status_code"] == 200
    assert wide_entry["outcome"] == "success"
    assert wide_entry["action"] == "GET /api/v1/health/ping"
    assert isinstance(wide_entry["duration_ms"], int)


@pytest.mark.unit
def test_invalid_request_id_header_is_replaced(app) -> None:
    response = app.test_client().get("/api/v1/health/ping", headers={"X-Request-ID": "bad id with spaces"})

    generated = response.headers.get("X-Request-ID")
    assert generated is not None
    assert generated.startswith("req_")


@pytest.mark.unit
def test_rejection_is_logged_with_schema_before_response(app) -> None:
    client = app.test_client()

    with capture_logs() as entries:
        response = client.post("/api/v1/auth/register", json={"name": "A"})

    assert response.status_code == 400
    assert schema_name_var.get() is None

    events = [entry.get("event") for entry in entries]
    assert events.index("Validation Error") < events.index("http_request_completed")

    rejection = next(entry for entry in entries if entry.get("event") == "Validation Error")
    assert rejection["log_level"] == "warning"
    assert rejection["schema"] == "signup"
    assert rejection["category"] == "Validation Error"
    assert [item["field"] for item in rejection["error"]] == ["name", "email", "password"]

    wide_entry = next(entry for entry in entries if entry.get("event") == "http_request_completed")
    assert wide_entry["outcome"] == "error"
    assert wide_entry["schema"] == "signup"
