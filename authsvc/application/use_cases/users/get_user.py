# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authsvc.domain.users.entities import User
from authsvc.domain.users.repositories import CredentialStore


class GetUserUseCase:
    def __init__(self, *, users: CredentialStore) -> None:
        self._users = users

    def execute(self, user_id: int) -> User | None:
        return self._users.get_by_id(user_id)
