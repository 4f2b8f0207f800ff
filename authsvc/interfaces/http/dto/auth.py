# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from authsvc.domain.users.entities import User


class CredentialsRequestDTO(BaseModel):
    # Emptiness and length are reported through the response envelope; these caps
    # only bound request size and sit far above USERNAME_MAX_LENGTH (<= 64)
    username: StrictStr = Field("", max_length=1024)
    password: StrictStr = Field("", max_length=1024)

    model_config = ConfigDict(extra="ignore")


class RegisterRequestDTO(CredentialsRequestDTO):
    pass


class LoginRequestDTO(CredentialsRequestDTO):
    pass


class UserDTO(BaseModel):
    id: int
    username: str
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(id=user.id, username=user.username, created_at=user.created_at)
