# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.application.service_response import Err, Ok, ServiceResponse
from authsvc.application.use_cases.users.policy import CredentialPolicy
from authsvc.application.use_cases.users import messages
from authsvc.domain.users.exceptions import DuplicateUsernameError
from authsvc.domain.users.repositories import CredentialStore, PasswordHasher
from authsvc.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        password_hasher: PasswordHasher,
        policy: CredentialPolicy | None = None,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._policy = policy or CredentialPolicy()

    def execute(self, username: str, password: str) -> ServiceResponse[int]:
        problem = self._policy.check_registration(username, password)
        if problem:
            logger.info(f"auth.register: rejected ({problem})")
            return Err(problem)

        username = self._policy.clean(username)
        verifier = self._password_hasher.hash(password)
        try:
            user_id = self._users.create(username, verifier)
        except DuplicateUsernameError:
            logger.info(f"auth.register: duplicate username={username!r}")
            return Err(messages.USERNAME_EXISTS)

        logger.info(f"auth.register: ok user_id={user_id}")
        return Ok(user_id)
