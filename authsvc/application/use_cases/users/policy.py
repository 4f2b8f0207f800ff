# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from authsvc.application.use_cases.users import messages
from authsvc.shared.config import PasswordConfig, UsernameConfig


@dataclass(slots=True, frozen=True)
class CredentialPolicy:
    case_sensitive: bool = False
    username_max_length: int = 64
    password_min_length: int = 1

    @classmethod
    def from_config(cls, usernames: UsernameConfig, passwords: PasswordConfig) -> CredentialPolicy:
        return cls(
            case_sensitive=usernames.case_sensitive,
            username_max_length=usernames.max_length,
            password_min_length=passwords.min_length,
        )

    def clean(self, username: str) -> str:
        return username.strip()

    def key(self, username: str) -> str:
        """Uniqueness key: trimmed, and case-folded unless usernames are case sensitive."""
        cleaned = self.clean(username)
        return cleaned if self.case_sensitive else cleaned.casefold()

    def check_registration(self, username: str, password: str) -> str | None:
        problem = self.check_login(username, password)
        if problem:
            return problem
        if len(self.clean(username)) > self.username_max_length:
            return messages.USERNAME_TOO_LONG
        if len(password) < self.password_min_length:
            return messages.PASSWORD_TOO_SHORT.format(min_length=self.password_min_length)
        return None

    def check_login(self, username: str, password: str) -> str | None:
        if not self.clean(username):
            return messages.USERNAME_REQUIRED
        if not password:
            return messages.PASSWORD_REQUIRED
        return None
