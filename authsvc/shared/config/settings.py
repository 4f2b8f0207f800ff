# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authsvc.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")


class PasswordConfig(BaseSettings):
    # werkzeug method string, work factor included ("scrypt:32768:8:1", "pbkdf2:sha256:600000")
    hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    salt_length: int = Field(24, ge=22, le=64, alias="PASSWORD_SALT_LENGTH")
    min_length: int = Field(1, ge=1, alias="PASSWORD_MIN_LENGTH")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("hash_method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        name = value.split(":", 1)[0]
        if name not in ("scrypt", "pbkdf2"):
            raise ValueError("PASSWORD_HASH_METHOD must be a scrypt or pbkdf2 method")
        return value


class UsernameConfig(BaseSettings):
    max_length: int = Field(64, ge=1, le=64, alias="USERNAME_MAX_LENGTH")
    case_sensitive: bool = Field(False, alias="USERNAME_CASE_SENSITIVE")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("case_sensitive", mode="before")
    @classmethod
    def _parse_case_sensitive(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class LockoutConfig(BaseSettings):
    enabled: bool = Field(True, alias="LOCKOUT_ENABLED")
    max_attempts: int = Field(5, ge=1, alias="LOCKOUT_MAX_ATTEMPTS")
    lockout_seconds: float = Field(15 * 60, ge=1.0, alias="LOCKOUT_SECONDS")
    window_seconds: float = Field(60 * 60, ge=1.0, alias="LOCKOUT_WINDOW")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("enabled", mode="before")
    @classmethod
    def _parse_enabled(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, ge=0.1, alias="RL_WINDOW")
    register_rate_limit_requests: int = Field(5, ge=1, alias="RL_REGISTER_LIMIT")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    # Report unknown username and wrong password with the same message
    generic_login_errors: bool = Field(False, alias="GENERIC_LOGIN_ERRORS")

    model_config = SettingsConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_rate_limit", "enable_hsts", "generic_login_errors", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _password_config_factory() -> PasswordConfig:
    return PasswordConfig()  # type: ignore[call-arg]


def _username_config_factory() -> UsernameConfig:
    return UsernameConfig()  # type: ignore[call-arg]


def _lockout_config_factory() -> LockoutConfig:
    return LockoutConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    storage_backend: Literal["sqlalchemy", "memory"] = Field(
        "sqlalchemy", alias="STORAGE_BACKEND"
    )

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    password_policy: PasswordConfig = Field(default_factory=_password_config_factory)
    username_policy: UsernameConfig = Field(default_factory=_username_config_factory)
    lockout: LockoutConfig = Field(default_factory=_lockout_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.generic_login_errors:
            warnings.append("⚠️  Login errors reveal whether a username exists")
        if not self.lockout.enabled:
            warnings.append("⚠️  Login lockout is DISABLED")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "LockoutConfig",
    "PasswordConfig",
    "SecurityConfig",
    "UsernameConfig",
    "load_config",
]
