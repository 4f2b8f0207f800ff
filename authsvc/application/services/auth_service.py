# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.application.interfaces import AuthService
from authsvc.application.service_response import ServiceResponse
from authsvc.application.use_cases.users.get_user import GetUserUseCase
from authsvc.application.use_cases.users.login_user import LoginUserUseCase
from authsvc.application.use_cases.users.register_user import RegisterUserUseCase
from authsvc.domain.users.entities import User


class DefaultAuthService(AuthService):
    """Credential-store backed implementation consumed by the HTTP adapter."""

    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        get_user_use_case: GetUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._get_user_use_case = get_user_use_case

    def register(self, username: str, password: str) -> ServiceResponse[int]:
        return self._register_use_case.execute(username, password)

    def login(
        self, username: str, password: str, ip_address: str | None = None
    ) -> ServiceResponse[int]:
        return self._login_use_case.execute(username, password, ip_address)

    def get_user(self, user_id: int) -> User | None:
        return self._get_user_use_case.execute(user_id)
