from __future__ import annotations

import pytest

from authsvc.shared.config import AppConfig, PasswordConfig, load_config


def test_defaults() -> None:
    config = AppConfig()

    assert config.storage_backend == "sqlalchemy"
    assert config.password_policy.hash_method == "scrypt"
    assert config.password_policy.salt_length >= 22
    assert config.username_policy.case_sensitive is False
    assert config.security.generic_login_errors is False
    assert config.lockout.enabled is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("USERNAME_CASE_SENSITIVE", "true")
    monkeypatch.setenv("GENERIC_LOGIN_ERRORS", "1")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    config = load_config()

    assert config.storage_backend == "memory"
    assert config.username_policy.case_sensitive is True
    assert config.security.generic_login_errors is True
    assert config.database.url == "sqlite:///other.db"
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]


def test_rejects_fast_hash_methods() -> None:
    with pytest.raises(ValueError):
        PasswordConfig(PASSWORD_HASH_METHOD="md5")


def test_production_requires_secret_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "dev")

    with pytest.raises(SystemExit):
        AppConfig()
