import pytest

_SIGNUP = {"name": "Asha Verma", "email": "asha@example.com", "password": "secret1"}


def _assert_validation_error(response, fields: list[str]) -> dict:
    assert response.status_code == 400
    payload = response.get_json()
    assert isinstance(payload, dict)
    assert set(payload) == {"error", "message", "details"}
    assert payload["error"] == "Validation Error"
    assert [detail["field"] for detail in payload["details"]] == fields
    return payload


def _assert_accepted(response, status: int, schema: str) -> dict:
    assert response.status_code == status
    payload = response.get_json()
    assert isinstance(payload, dict)
    assert payload.get("success") is True
    assert payload.get("error") is False
    data = payload.get("data")
    assert isinstance(data, dict)
    assert data["schema"] == schema
    return data["payload"]


@pytest.mark.unit
def test_api_v1_auth_register_accepts_valid_signup(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={**_SIGNUP, "mobile": "9876543210", "role": "admin"},
    )

    accepted = _assert_accepted(response, 201, "signup")
    assert accepted == {"name": "Asha Verma", "email": "asha@example.com", "mobile": "9876543210"}
    assert "password" not in accepted


@pytest.mark.unit
def test_api_v1_auth_register_reports_all_violations(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "A", "email": "bad", "mobile": "12345"},
    )

    payload = _assert_validation_error(response, ["name", "email", "password", "mobile"])
    assert payload["message"] == (
        "Name is minimum 2 characters, Invalid email format, Password is required, Mobile number must be 10 digits"
    )
    assert [detail["code"] for detail in payload["details"]] == [
        "out-of-bounds",
        "pattern-mismatch",
        "missing-required",
        "pattern-mismatch",
    ]


@pytest.mark.unit
def test_api_v1_auth_register_rejects_non_object_body(client) -> None:
    response = client.post("/api/v1/auth/register", json=["not", "an", "object"])

    _assert_validation_error(response, ["body"])


@pytest.mark.unit
def test_api_v1_auth_register_rejects_malformed_json(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        data="{not json",
        content_type="application/json",
    )

    payload = _assert_validation_error(response, ["body"])
    assert payload["message"] == "Request body must be a JSON object"


@pytest.mark.unit
def test_api_v1_auth_register_treats_empty_body_as_empty_object(client) -> None:
    response = client.post("/api/v1/auth/register")

    _assert_validation_error(response, ["name", "email", "password"])


@pytest.mark.unit
@pytest.mark.parametrize(
    ("path", "body", "schema"),
    [
        ("/api/v1/auth/login/email-password", {"email": "asha@example.com", "password": "x"}, "login_email"),
        ("/api/v1/auth/login/mobile-password", {"mobile": "9876543210", "password": "x"}, "login_mobile"),
        ("/api/v1/auth/login/email-otp/send", {"email": "asha@example.com"}, "otp_send_email"),
        ("/api/v1/auth/login/email-otp/verify", {"email": "asha@example.com", "otp": "123456"}, "otp_verify_email"),
        ("/api/v1/auth/login/mobile-otp/send", {"mobile": "9876543210"}, "otp_send_mobile"),
        ("/api/v1/auth/login/mobile-otp/verify", {"mobile": "9876543210", "otp": "123456"}, "otp_verify_mobile"),
    ],
)
def test_api_v1_auth_login_routes_accept_valid_payloads(client, path: str, body: dict, schema: str) -> None:
    response = client.post(path, json=body)

    accepted = _assert_accepted(response, 200, schema)
    assert "password" not in accepted


@pytest.mark.unit
def test_api_v1_auth_mobile_otp_verify_rejects_short_otp(client) -> None:
    response = client.post("/api/v1/auth/login/mobile-otp/verify", json={"mobile": "98765", "otp": "12"})

    payload = _assert_validation_error(response, ["mobile", "otp"])
    assert payload["message"] == "Mobile number must be 10 digits, OTP must be 6 digits"


@pytest.mark.unit
def test_api_v1_auth_change_password_contract(client) -> None:
    ok = client.post("/api/v1/auth/change-password", json={"currentPassword": "old", "newPassword": "secret1"})
    assert _assert_accepted(ok, 200, "change_password") == {}

    bad = client.post("/api/v1/auth/change-password", json={"newPassword": "123"})
    _assert_validation_error(bad, ["currentPassword", "newPassword"])


@pytest.mark.unit
def test_api_v1_auth_profile_accepts_empty_update(client) -> None:
    response = client.put("/api/v1/auth/profile", json={})

    assert _assert_accepted(response, 200, "profile_update") == {}


@pytest.mark.unit
def test_api_v1_auth_profile_normalizes_payload(client) -> None:
    response = client.put(
        "/api/v1/auth/profile",
        json={"age": "35", "gender": "FEMALE", "bloodGroup": "ab-", "hobbies": ["yoga"]},
    )

    accepted = _assert_accepted(response, 200, "profile_update")
    assert accepted == {"age": 35, "gender": "female", "bloodGroup": "AB-", "hobbies": ["yoga"]}


@pytest.mark.unit
def test_api_v1_auth_profile_reports_nested_settings(client) -> None:
    response = client.put(
        "/api/v1/auth/profile",
        json={"bio": "b" * 501, "notificationSettings": {"email": True, "push": False, "threats": True}},
    )

    _assert_validation_error(response, ["bio", "notificationSettings.safety"])


@pytest.mark.unit
def test_api_v1_auth_notification_settings_contract(client) -> None:
    settings = {"email": True, "push": False, "threats": True, "safety": False}
    ok = client.put("/api/v1/auth/notifications/settings", json={"settings": settings})
    assert _assert_accepted(ok, 200, "notification_settings") == {"settings": settings}

    bad = client.put("/api/v1/auth/notifications/settings", json={"settings": {"email": "on"}})
    _assert_validation_error(
        bad,
        ["settings.email", "settings.push", "settings.threats", "settings.safety"],
    )


@pytest.mark.unit
def test_api_v1_validation_error_does_not_echo_password(client) -> None:
    response = client.post("/api/v1/auth/register", json={"name": "Asha", "email": "bad", "password": "hunter2x"})

    assert response.status_code == 400
    assert b"hunter2x" not in response.data
