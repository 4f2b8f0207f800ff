# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from flask import Flask

from authsvc.application.service_response import Err, Ok
from authsvc.domain.users.entities import User
from authsvc.interfaces.http.controllers.auth_controller import AuthController
from authsvc.shared.config import SecurityConfig
from authsvc.shared.errors import StorageUnavailableError
from authsvc.shared.middleware import configure_error_handling, configure_rate_limiting
from authsvc.tests.fakes import StubAuthService


def _app(
    service: StubAuthService,
    *,
    rate_limit: bool = False,
    security: SecurityConfig | None = None,
) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    configure_rate_limiting(app, security or SecurityConfig(ENABLE_RATE_LIMIT=rate_limit))
    app.register_blueprint(AuthController(auth_service=service).as_blueprint())
    return app


def test_register_returns_201_with_location() -> None:
    service = StubAuthService(register_result=Ok(7))

    with _app(service).test_client() as client:
        response = client.post(
            "/api/auth/register", json={"username": "alice", "password": "Secret123!"}
        )

    assert response.status_code == 201
    assert response.headers["Location"].endswith("/api/auth/7")
    assert response.get_json() == {"data": 7, "success": True, "message": ""}
    assert service.calls == [("register", "alice", "Secret123!")]


def test_register_failure_returns_400_with_envelope() -> None:
    service = StubAuthService(register_result=Err("Username already exists"))

    with _app(service).test_client() as client:
        response = client.post(
            "/api/auth/register", json={"username": "alice", "password": "Other456!"}
        )

    assert response.status_code == 400
    assert "Location" not in response.headers
    assert response.get_json() == {
        "data": None,
        "success": False,
        "message": "Username already exists",
    }


def test_register_missing_fields_reach_service_as_empty() -> None:
    service = StubAuthService(register_result=Err("Username is required"))

    with _app(service).test_client() as client:
        response = client.post("/api/auth/register", json={})

    assert response.status_code == 400
    assert service.calls == [("register", "", "")]


@pytest.mark.parametrize("body", [{"username": 5, "password": "x"}, ["alice", "pw"]])
def test_malformed_body_returns_422(body) -> None:
    service = StubAuthService()

    with _app(service).test_client() as client:
        response = client.post("/api/auth/login", json=body)

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"
    assert service.calls == []


def test_get_user_found() -> None:
    created = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
    user = User(
        id=1,
        username="alice",
        password_hash="scrypt:32768:8:1$abc",
        password_salt="salt",
        created_at=created,
    )
    service = StubAuthService(users={1: user})

    with _app(service).test_client() as client:
        response = client.get("/api/auth/1")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["id"] == 1
    assert payload["username"] == "alice"
    assert "password_hash" not in payload
    assert "password_salt" not in payload


def test_get_user_missing_returns_empty_404() -> None:
    with _app(StubAuthService()).test_client() as client:
        response = client.get("/api/auth/999")

    assert response.status_code == 404
    assert response.data == b""


def test_login_success_and_failure() -> None:
    ok_service = StubAuthService(login_result=Ok(1))
    with _app(ok_service).test_client() as client:
        response = client.post(
            "/api/auth/login",
            json={"username": "alice", "password": "Secret123!"},
            headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
        )
    assert response.status_code == 200
    assert response.get_json() == {"data": 1, "success": True, "message": ""}
    assert ok_service.calls == [("login", "alice", "Secret123!", "203.0.113.9")]

    bad_service = StubAuthService(login_result=Err("Wrong password"))
    with _app(bad_service).test_client() as client:
        response = client.post("/api/auth/login", json={"username": "alice", "password": "x"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Wrong password"


def test_storage_failure_maps_to_503() -> None:
    class BrokenService(StubAuthService):
        def get_user(self, user_id: int) -> User | None:
            raise StorageUnavailableError("get_by_id")

    with _app(BrokenService()).test_client() as client:
        response = client.get("/api/auth/1")

    assert response.status_code == 503
    assert response.get_json()["error"] == "storage_unavailable"


def test_unexpected_error_maps_to_500() -> None:
    class ExplodingService(StubAuthService):
        def login(self, username: str, password: str, ip_address: str | None = None):
            raise RuntimeError("boom")

    with _app(ExplodingService()).test_client() as client:
        response = client.post("/api/auth/login", json={"username": "a", "password": "b"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_login_is_rate_limited() -> None:
    service = StubAuthService(login_result=Err("Wrong password"))

    with _app(service, rate_limit=True).test_client() as client:
        statuses = [
            client.post("/api/auth/login", json={"username": "a", "password": "b"}).status_code
            for _ in range(11)
        ]

    assert statuses[:10] == [400] * 10
    assert statuses[10] == 429


def test_login_limit_follows_configuration() -> None:
    service = StubAuthService(login_result=Err("Wrong password"))
    security = SecurityConfig(ENABLE_RATE_LIMIT=True, RL_LIMIT=2)

    with _app(service, security=security).test_client() as client:
        statuses = [
            client.post("/api/auth/login", json={"username": "a", "password": "b"}).status_code
            for _ in range(4)
        ]

    assert statuses == [400, 400, 429, 429]
    assert len(service.calls) == 2


def test_register_has_its_own_limit() -> None:
    service = StubAuthService(register_result=Err("Username already exists"))
    security = SecurityConfig(ENABLE_RATE_LIMIT=True, RL_LIMIT=1, RL_REGISTER_LIMIT=3)

    with _app(service, security=security).test_client() as client:
        registers = [
            client.post("/api/auth/register", json={"username": "a", "password": "b"}).status_code
            for _ in range(4)
        ]
        login = client.post("/api/auth/login", json={"username": "a", "password": "b"})

    assert registers == [400, 400, 400, 429]
    assert login.status_code != 429
