# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from threading import Lock

from authsvc.application.use_cases.users.policy import CredentialPolicy
from authsvc.domain.users.entities import PasswordVerifier, User
from authsvc.domain.users.exceptions import DuplicateUsernameError
from authsvc.domain.users.repositories import MAX_USER_ID, CredentialStore


class InMemoryCredentialStore(CredentialStore):
    """Process-local store; the lock covers the duplicate check and the insert together."""

    def __init__(self, *, policy: CredentialPolicy | None = None) -> None:
        self._policy = policy or CredentialPolicy()
        self._by_id: dict[int, User] = {}
        self._ids_by_key: dict[str, int] = {}
        self._seq = 0
        self._lock = Lock()

    def create(self, username: str, verifier: PasswordVerifier) -> int:
        username = self._policy.clean(username)
        key = self._policy.key(username)
        with self._lock:
            if key in self._ids_by_key:
                raise DuplicateUsernameError(username)
            self._seq += 1
            user = User(
                id=self._seq,
                username=username,
                password_hash=verifier.hash,
                password_salt=verifier.salt,
                created_at=datetime.now(UTC),
            )
            self._by_id[user.id] = user
            self._ids_by_key[key] = user.id
            return user.id

    def get_by_id(self, user_id: int) -> User | None:
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        with self._lock:
            return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> User | None:
        key = self._policy.key(username)
        with self._lock:
            user_id = self._ids_by_key.get(key)
            return self._by_id.get(user_id) if user_id is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)
