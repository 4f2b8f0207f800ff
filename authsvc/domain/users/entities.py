# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from authsvc.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class PasswordVerifier:
    """Stored form of a password: KDF output plus the salt it was derived with."""

    hash: str
    salt: str

    def __post_init__(self) -> None:
        if not self.hash:
            raise InvariantViolation("must not be empty", field="hash")
        if not self.salt:
            raise InvariantViolation("must not be empty", field="salt")

    def __repr__(self) -> str:
        return "PasswordVerifier(hash=<redacted>, salt=<redacted>)"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str = field(repr=False)
    password_salt: str = field(repr=False)
    created_at: datetime

    @property
    def verifier(self) -> PasswordVerifier:
        return PasswordVerifier(hash=self.password_hash, salt=self.password_salt)
