# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .in_memory_credential_store import InMemoryCredentialStore
from .sqlalchemy_credential_store import SqlAlchemyCredentialStore

__all__ = ["InMemoryCredentialStore", "SqlAlchemyCredentialStore"]
