# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.application.interfaces import LoginAttemptTracker
from authsvc.application.service_response import Err, Ok, ServiceResponse
from authsvc.application.use_cases.users.policy import CredentialPolicy
from authsvc.application.use_cases.users import messages
from authsvc.domain.users.entities import PasswordVerifier
from authsvc.domain.users.repositories import CredentialStore, PasswordHasher
from authsvc.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: CredentialStore,
        password_hasher: PasswordHasher,
        policy: CredentialPolicy | None = None,
        attempts: LoginAttemptTracker | None = None,
        generic_errors: bool = False,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._policy = policy or CredentialPolicy()
        self._attempts = attempts
        self._generic_errors = generic_errors
        self._decoy: PasswordVerifier | None = None

    def execute(
        self, username: str, password: str, ip_address: str | None = None
    ) -> ServiceResponse[int]:
        problem = self._policy.check_login(username, password)
        if problem:
            return Err(problem)

        key = self._policy.key(username)
        if self._attempts is not None and self._attempts.is_locked(key):
            logger.warning(f"auth.login: locked username={key!r} ip={ip_address}")
            return Err(messages.ACCOUNT_LOCKED)

        user = self._users.get_by_username(username)
        if user is None:
            # Burn a verify anyway so a miss costs as much as a wrong password.
            self._password_hasher.verify(password, self._decoy_verifier())
            self._record(key, False, ip_address)
            logger.info(f"auth.login: unknown username={key!r}")
            return Err(self._failure(messages.USER_NOT_FOUND))

        if not self._password_hasher.verify(password, user.verifier):
            self._record(key, False, ip_address)
            logger.info(f"auth.login: wrong password user_id={user.id}")
            return Err(self._failure(messages.WRONG_PASSWORD))

        self._record(key, True, ip_address)
        logger.info(f"auth.login: ok user_id={user.id}")
        return Ok(user.id)

    def _failure(self, message: str) -> str:
        return messages.INVALID_CREDENTIALS if self._generic_errors else message

    def _record(self, key: str, success: bool, ip_address: str | None) -> None:
        if self._attempts is not None:
            self._attempts.record_attempt(key, success=success, ip_address=ip_address)

    def _decoy_verifier(self) -> PasswordVerifier:
        if self._decoy is None:
            self._decoy = self._password_hasher.hash("decoy-password")
        return self._decoy
