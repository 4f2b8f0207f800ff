# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authsvc.shared.errors.base import DomainError


class DuplicateUsernameError(DomainError):
    default_code = "duplicate_username"
    default_status = HTTPStatus.CONFLICT

    def __init__(self, username: str) -> None:
        super().__init__(context={"username": username})
        self.username = username
