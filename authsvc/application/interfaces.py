# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from authsvc.application.service_response import ServiceResponse
from authsvc.domain.users.entities import User


class AuthService(Protocol):
    """Capabilities the HTTP adapter needs from the credential core."""

    def register(self, username: str, password: str) -> ServiceResponse[int]: ...

    def login(
        self, username: str, password: str, ip_address: str | None = None
    ) -> ServiceResponse[int]: ...

    def get_user(self, user_id: int) -> User | None: ...


class LoginAttemptTracker(Protocol):
    def is_locked(self, username: str) -> bool: ...

    def record_attempt(
        self, username: str, success: bool, ip_address: str | None = None
    ) -> None: ...
