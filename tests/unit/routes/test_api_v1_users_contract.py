import pytest

_USER = {"name": "Asha Verma", "email": "asha@example.com", "password": "secret1"}


@pytest.mark.unit
def test_api_v1_users_create_applies_defaults(client) -> None:
    response = client.post("/api/v1/users", json={**_USER, "isActive": False, "gender": "MALE"})

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["success"] is True
    accepted = payload["data"]["payload"]
    assert accepted == {
        "name": "Asha Verma",
        "email": "asha@example.com",
        "gender": "male",
        "isActive": False,
        "role": "user",
    }


@pytest.mark.unit
def test_api_v1_users_create_rejects_unknown_gender(client) -> None:
    response = client.post("/api/v1/users", json={**_USER, "gender": "unknown", "age": 101})

    assert response.status_code == 400
    payload = response.get_json()
    assert [detail["field"] for detail in payload["details"]] == ["age", "gender"]
    assert payload["message"].startswith("Age is maximum 100, Gender must be")


@pytest.mark.unit
def test_api_v1_users_rejects_wrong_method(client) -> None:
    response = client.get("/api/v1/users")

    assert response.status_code == 405
    payload = response.get_json()
    assert payload["error"] is True
    assert payload["success"] is False
