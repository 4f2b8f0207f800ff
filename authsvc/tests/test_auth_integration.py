# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

import pytest
from flask import Flask

from authsvc.app import create_app
from authsvc.infrastructure.container import Container
from authsvc.shared.config import (
    AppConfig,
    DatabaseConfig,
    LockoutConfig,
    PasswordConfig,
    SecurityConfig,
)


def _config(sqlite_url: str, **overrides) -> AppConfig:
    values = {
        "database": DatabaseConfig(DATABASE_URL=sqlite_url),
        "password_policy": PasswordConfig(PASSWORD_HASH_METHOD="pbkdf2:sha256:1000"),
        "security": SecurityConfig(ENABLE_RATE_LIMIT=False),
    }
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture()
def container(sqlite_url: str) -> Iterator[Container]:
    container = Container(_config(sqlite_url))
    yield container
    container.dispose()


@pytest.fixture()
def app(container: Container) -> Flask:
    return create_app(container=container)


def test_register_get_login_flow(app: Flask) -> None:
    with app.test_client() as client:
        created = client.post(
            "/api/auth/register", json={"username": "alice", "password": "Secret123!"}
        )
        assert created.status_code == 201
        assert created.get_json() == {"data": 1, "success": True, "message": ""}
        location = created.headers["Location"]

        duplicate = client.post(
            "/api/auth/register", json={"username": "alice", "password": "Other456!"}
        )
        assert duplicate.status_code == 400
        assert duplicate.get_json()["message"] == "Username already exists"

        fetched = client.get(location)
        assert fetched.status_code == 200
        assert fetched.get_json()["username"] == "alice"

        assert client.get("/api/auth/999").status_code == 404

        login = client.post("/api/auth/login", json={"username": "alice", "password": "Secret123!"})
        assert login.status_code == 200
        assert login.get_json()["data"] == 1

        wrong = client.post("/api/auth/login", json={"username": "alice", "password": "wrong"})
        assert wrong.status_code == 400
        assert wrong.get_json() == {"data": None, "success": False, "message": "Wrong password"}

        unknown = client.post("/api/auth/login", json={"username": "bob", "password": "x"})
        assert unknown.get_json()["message"] == "User not found"


def test_stored_row_holds_only_hash_and_salt(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json={"username": "carol", "password": "Secret123!"})
        client.post("/api/auth/register", json={"username": "dave", "password": "Secret123!"})

    carol = container.credential_store.get_by_username("carol")
    dave = container.credential_store.get_by_username("dave")
    assert "Secret123!" not in (carol.password_hash + carol.password_salt)
    assert carol.password_salt != dave.password_salt
    assert carol.password_hash != dave.password_hash


def test_concurrent_http_registrations(app: Flask) -> None:
    def register(_: int) -> int:
        with app.test_client() as client:
            return client.post(
                "/api/auth/register", json={"username": "racer", "password": "pw"}
            ).status_code

    with ThreadPoolExecutor(max_workers=6) as pool:
        statuses = list(pool.map(register, range(6)))

    assert statuses.count(201) == 1
    assert statuses.count(400) == 5


def test_hardened_config_hides_login_failure_cause(sqlite_url: str) -> None:
    container = Container(
        _config(
            sqlite_url,
            security=SecurityConfig(ENABLE_RATE_LIMIT=False, GENERIC_LOGIN_ERRORS=True),
        )
    )
    try:
        app = create_app(container=container)
        with app.test_client() as client:
            client.post("/api/auth/register", json={"username": "erin", "password": "pw"})
            wrong = client.post("/api/auth/login", json={"username": "erin", "password": "no"})
            missing = client.post("/api/auth/login", json={"username": "zed", "password": "no"})
    finally:
        container.dispose()

    assert wrong.get_json()["message"] == "Invalid username or password"
    assert missing.get_json()["message"] == "Invalid username or password"


def test_lockout_can_be_disabled(sqlite_url: str) -> None:
    container = Container(_config(sqlite_url, lockout=LockoutConfig(LOCKOUT_ENABLED=False)))
    try:
        app = create_app(container=container)
        with app.test_client() as client:
            client.post("/api/auth/register", json={"username": "frank", "password": "pw"})
            for _ in range(10):
                client.post("/api/auth/login", json={"username": "frank", "password": "no"})
            ok = client.post("/api/auth/login", json={"username": "frank", "password": "pw"})
    finally:
        container.dispose()

    assert container.login_attempts is None
    assert ok.status_code == 200


def test_memory_backend(sqlite_url: str) -> None:
    container = Container(_config(sqlite_url, STORAGE_BACKEND="memory"))
    app = create_app(container=container)

    with app.test_client() as client:
        created = client.post("/api/auth/register", json={"username": "gina", "password": "pw"})

    assert created.status_code == 201
    assert "engine" not in container.__dict__


def test_responses_carry_security_headers(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/auth/1", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"] == "req-42"


def test_get_user_with_out_of_range_id_is_not_found(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json={"username": "hana", "password": "pw"})
        response = client.get("/api/auth/99999999999999999999")

    assert response.status_code == 404
    assert response.data == b""


@pytest.mark.parametrize("length", [65, 300, 1024])
def test_overlong_username_is_reported_in_envelope(app: Flask, length: int) -> None:
    with app.test_client() as client:
        response = client.post(
            "/api/auth/register", json={"username": "u" * length, "password": "pw"}
        )

    assert response.status_code == 400
    assert response.get_json() == {
        "data": None,
        "success": False,
        "message": "Username is too long",
    }
