import pytest

from safespace.schemas.constraints import ExtraPolicy
from safespace.settings import DEFAULT_CORS_ORIGINS, Settings


@pytest.mark.unit
def test_settings_defaults_for_testing_environment() -> None:
    settings = Settings.load()

    assert settings.environment == "testing"
    assert settings.debug is True
    assert settings.is_production is False
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.schema_extra_policy is ExtraPolicy.IGNORE
    assert settings.api_v1_docs_enabled is True


@pytest.mark.unit
@pytest.mark.parametrize(("raw", "policy"), [("forbid", ExtraPolicy.FORBID), ("ALLOW", ExtraPolicy.ALLOW)])
def test_settings_schema_extra_fields_policy(monkeypatch, raw: str, policy: ExtraPolicy) -> None:
    monkeypatch.setenv("SCHEMA_EXTRA_FIELDS", raw)

    settings = Settings.load()

    assert settings.schema_extra_policy is policy
    assert settings.to_flask_config()["SCHEMA_EXTRA_FIELDS"] == policy.value


@pytest.mark.unit
def test_settings_rejects_unknown_schema_extra_fields(monkeypatch) -> None:
    monkeypatch.setenv("SCHEMA_EXTRA_FIELDS", "strict")

    with pytest.raises(ValueError, match="SCHEMA_EXTRA_FIELDS"):
        Settings.load()


@pytest.mark.unit
def test_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Settings.load()


@pytest.mark.unit
def test_settings_parses_cors_origins(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    assert Settings.load().cors_origins == ("https://a.example", "https://b.example")

    monkeypatch.setenv("CORS_ORIGINS", '["https://c.example"]')
    assert Settings.load().cors_origins == ("https://c.example",)


@pytest.mark.unit
def test_settings_fails_fast_when_secret_key_missing_in_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    # Prevent `load_dotenv()` from injecting a value from local `.env`.
    monkeypatch.setenv("SECRET_KEY", "")

    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings.load()


@pytest.mark.unit
def test_settings_production_disables_docs_and_wildcard_cors(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")

    settings = Settings.load()
    assert settings.debug is False
    assert settings.api_v1_docs_enabled is False

    monkeypatch.setenv("CORS_ORIGINS", "*")
    with pytest.raises(ValueError, match="CORS_ORIGINS"):
        Settings.load()


@pytest.mark.unit
def test_settings_generates_secret_key_outside_production(monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "")

    settings = Settings.load()

    assert len(settings.secret_key) >= 32
