# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from authsvc.application.services.auth_service import DefaultAuthService
from authsvc.application.use_cases.users.policy import CredentialPolicy
from authsvc.application.services.password_hashing import WerkzeugPasswordHasher
from authsvc.application.use_cases.users.get_user import GetUserUseCase
from authsvc.application.use_cases.users.login_user import LoginUserUseCase
from authsvc.application.use_cases.users.register_user import RegisterUserUseCase
from authsvc.domain.users.repositories import CredentialStore
from authsvc.infrastructure.auth.login_attempts import LoginAttemptsTracker
from authsvc.infrastructure.db import create_db_engine, create_session_factory, init_db
from authsvc.infrastructure.repositories.users import (
    InMemoryCredentialStore,
    SqlAlchemyCredentialStore,
)
from authsvc.interfaces.http.controllers.auth_controller import AuthController
from authsvc.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @cached_property
    def engine(self) -> Engine:
        engine = create_db_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def credential_policy(self) -> CredentialPolicy:
        return CredentialPolicy.from_config(
            self.config.username_policy, self.config.password_policy
        )

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher.from_config(self.config.password_policy)

    @cached_property
    def credential_store(self) -> CredentialStore:
        if self.config.storage_backend == "memory":
            return InMemoryCredentialStore(policy=self.credential_policy)
        return SqlAlchemyCredentialStore(self.session_factory, policy=self.credential_policy)

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker | None:
        if not self.config.lockout.enabled:
            return None
        return LoginAttemptsTracker.from_config(self.config.lockout)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.credential_store,
            password_hasher=self.password_hasher,
            policy=self.credential_policy,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.credential_store,
            password_hasher=self.password_hasher,
            policy=self.credential_policy,
            attempts=self.login_attempts,
            generic_errors=self.config.security.generic_login_errors,
        )

    @cached_property
    def get_user_use_case(self) -> GetUserUseCase:
        return GetUserUseCase(users=self.credential_store)

    @cached_property
    def auth_service(self) -> DefaultAuthService:
        return DefaultAuthService(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            get_user_use_case=self.get_user_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(auth_service=self.auth_service)

    def dispose(self) -> None:
        if "engine" in self.__dict__:
            self.engine.dispose()
