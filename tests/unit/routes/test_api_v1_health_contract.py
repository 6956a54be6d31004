import pytest


@pytest.mark.unit
def test_api_v1_health_ping_contract(client) -> None:
    response = client.get("/api/v1/health/ping")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == "Health check passed"
    assert payload["data"] == {"status": "ok"}


@pytest.mark.unit
def test_api_v1_root_and_openapi_are_discoverable(client) -> None:
    root = client.get("/api/v1/")
    assert root.status_code == 200
    assert root.get_json()["data"]["health_ping_url"] == "/api/v1/health/ping"

    openapi = client.get("/api/v1/openapi.json")
    assert openapi.status_code == 200
    paths = openapi.get_json()["paths"]
    assert "/auth/register" in paths
    assert "/users" in paths


@pytest.mark.unit
def test_api_v1_unknown_route_returns_error_envelope(client) -> None:
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    payload = response.get_json()
    assert payload["error"] is True
    assert payload["message_code"] == "INVALID_REQUEST"
    assert payload["context"]["request_id"]


@pytest.mark.unit
def test_forwarded_proto_header_does_not_mutate_app_config(app, client) -> None:
    scheme_before = app.config.get("PREFERRED_URL_SCHEME")

    forwarded = client.get("/api/v1/health/ping", headers={"X-Forwarded-Proto": "https"})
    plain = client.get("/api/v1/health/ping")

    assert forwarded.status_code == 200
    assert plain.status_code == 200
    assert app.config.get("PREFERRED_URL_SCHEME") == scheme_before
