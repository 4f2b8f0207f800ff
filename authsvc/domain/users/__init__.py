# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import PasswordVerifier, User
from .exceptions import DuplicateUsernameError
from .repositories import MAX_USER_ID, CredentialStore, PasswordHasher

__all__ = [
    "CredentialStore",
    "DuplicateUsernameError",
    "MAX_USER_ID",
    "PasswordHasher",
    "PasswordVerifier",
    "User",
]
