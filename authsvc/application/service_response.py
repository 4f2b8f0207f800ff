# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Uniform result envelope returned by every auth operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T
    message: str = ""

    @property
    def success(self) -> Literal[True]:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "success": True, "message": self.message}


@dataclass(frozen=True)
class Err:
    message: str

    @property
    def success(self) -> Literal[False]:
        return False

    @property
    def data(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"data": None, "success": False, "message": self.message}


ServiceResponse = Ok[T] | Err


__all__ = ["Err", "Ok", "ServiceResponse"]
