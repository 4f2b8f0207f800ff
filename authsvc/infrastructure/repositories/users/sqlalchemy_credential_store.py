# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authsvc.application.use_cases.users.policy import CredentialPolicy
from authsvc.domain.users.entities import PasswordVerifier
from authsvc.domain.users.entities import User as DomainUser
from authsvc.domain.users.exceptions import DuplicateUsernameError
from authsvc.domain.users.repositories import MAX_USER_ID, CredentialStore
from authsvc.infrastructure.db.models import UserRecord
from authsvc.infrastructure.unit_of_work import unit_of_work_scope
from authsvc.shared.logging import logger


def _to_domain(row: UserRecord) -> DomainUser:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        password_salt=row.password_salt,
        created_at=created_at,
    )


class SqlAlchemyCredentialStore(CredentialStore):
    """Users table keyed by id with a unique index on the normalized username.

    Uniqueness is enforced by the database: a concurrent duplicate insert fails
    on the unique index instead of racing a separate existence check.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        policy: CredentialPolicy | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._policy = policy or CredentialPolicy()

    def create(self, username: str, verifier: PasswordVerifier) -> int:
        username = self._policy.clean(username)
        try:
            with unit_of_work_scope(self._session_factory, operation="create") as session:
                row = UserRecord(
                    username=username,
                    username_key=self._policy.key(username),
                    password_hash=verifier.hash,
                    password_salt=verifier.salt,
                )
                session.add(row)
                session.flush()
                user_id = row.id
        except IntegrityError as exc:
            raise DuplicateUsernameError(username) from exc
        logger.debug(f"credential_store.create: user_id={user_id}")
        return user_id

    def get_by_id(self, user_id: int) -> DomainUser | None:
        # Out-of-range ids overflow the driver's INTEGER binding
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        with unit_of_work_scope(self._session_factory, operation="get_by_id") as session:
            row = session.get(UserRecord, user_id)
            return _to_domain(row) if row else None

    def get_by_username(self, username: str) -> DomainUser | None:
        key = self._policy.key(username)
        with unit_of_work_scope(self._session_factory, operation="get_by_username") as session:
            row = session.scalars(
                select(UserRecord).where(UserRecord.username_key == key)
            ).first()
            return _to_domain(row) if row else None
