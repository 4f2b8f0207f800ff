# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authsvc.domain.users.entities import PasswordVerifier
from authsvc.domain.users.repositories import PasswordHasher
from authsvc.shared.config import PasswordConfig

_SEPARATOR = "$"


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted scrypt/pbkdf2 via werkzeug, stored as separate hash and salt.

    werkzeug encodes a password as ``method$salt$digest``; the salt is split out
    so it can live in its own column, and rejoined before verification.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 24) -> None:
        self._method = method
        self._salt_length = salt_length

    @classmethod
    def from_config(cls, config: PasswordConfig) -> WerkzeugPasswordHasher:
        return cls(method=config.hash_method, salt_length=config.salt_length)

    def hash(self, password: str) -> PasswordVerifier:
        encoded = generate_password_hash(
            password, method=self._method, salt_length=self._salt_length
        )
        method, salt, digest = encoded.split(_SEPARATOR, 2)
        return PasswordVerifier(hash=f"{method}{_SEPARATOR}{digest}", salt=salt)

    def verify(self, password: str, verifier: PasswordVerifier) -> bool:
        method, sep, digest = verifier.hash.partition(_SEPARATOR)
        if not sep or not digest:
            return False
        encoded = _SEPARATOR.join((method, verifier.salt, digest))
        try:
            return bool(check_password_hash(encoded, password))
        except ValueError:
            return False
