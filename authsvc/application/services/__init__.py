# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .auth_service import DefaultAuthService

__all__ = ["DefaultAuthService", "WerkzeugPasswordHasher"]
