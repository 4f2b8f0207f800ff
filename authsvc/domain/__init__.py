# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the credential service."""

from .exceptions import InvariantViolation, InvariantViolationError
from .users import (
    CredentialStore,
    DuplicateUsernameError,
    PasswordHasher,
    PasswordVerifier,
    User,
)

__all__ = [
    "CredentialStore",
    "DuplicateUsernameError",
    "InvariantViolation",
    "InvariantViolationError",
    "PasswordHasher",
    "PasswordVerifier",
    "User",
]
