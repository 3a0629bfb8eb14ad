"""Unit tests for application settings configuration."""

from pathlib import Path

from paylink.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults_match_link_policy_defaults():
    settings = Settings(_env_file=None)

    assert settings.storage_backend == "json"
    assert settings.default_expiry_minutes == 30
    assert settings.max_id_attempts == 10
    assert settings.id_bytes == 6
    assert settings.admin_list_enabled is False


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://shop.example")
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("ADMIN_LIST_ENABLED", "true")

    settings = Settings(_env_file=None)

    assert settings.base_url == "https://shop.example"
    assert settings.storage_backend == "sqlite"
    assert settings.admin_list_enabled is True
