from __future__ import annotations

import itertools

from authsvc.application.service_response import Err, Ok, ServiceResponse
from authsvc.domain.users.entities import PasswordVerifier, User
from authsvc.domain.users.repositories import PasswordHasher


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self._salts = itertools.count(1)
        self.verify_calls = 0

    def hash(self, password: str) -> PasswordVerifier:
        salt = f"salt{next(self._salts)}"
        return PasswordVerifier(hash=f"hashed:{salt}:{password}", salt=salt)

    def verify(self, password: str, verifier: PasswordVerifier) -> bool:
        self.verify_calls += 1
        return verifier.hash == f"hashed:{verifier.salt}:{password}"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubAuthService:
    """Scripted stand-in for the credential core, recording every call."""

    def __init__(
        self,
        *,
        register_result: ServiceResponse[int] | None = None,
        login_result: ServiceResponse[int] | None = None,
        users: dict[int, User] | None = None,
    ) -> None:
        self.register_result = register_result or Ok(1)
        self.login_result = login_result or Err("Wrong password")
        self.users = users or {}
        self.calls: list[tuple] = []

    def register(self, username: str, password: str) -> ServiceResponse[int]:
        self.calls.append(("register", username, password))
        return self.register_result

    def login(
        self, username: str, password: str, ip_address: str | None = None
    ) -> ServiceResponse[int]:
        self.calls.append(("login", username, password, ip_address))
        return self.login_result

    def get_user(self, user_id: int) -> User | None:
        self.calls.append(("get_user", user_id))
        return self.users.get(user_id)
