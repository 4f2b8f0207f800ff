# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import PasswordVerifier, User

# Ids are signed 64-bit integers; anything outside [1, MAX_USER_ID] was never issued
MAX_USER_ID = 2**63 - 1


class CredentialStore(Protocol):
    def create(self, username: str, verifier: PasswordVerifier) -> int: ...
    def get_by_id(self, user_id: int) -> User | None: ...
    def get_by_username(self, username: str) -> User | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> PasswordVerifier: ...
    def verify(self, password: str, verifier: PasswordVerifier) -> bool: ...
