# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import AuthService, LoginAttemptTracker
from .service_response import Err, Ok, ServiceResponse

__all__ = [
    "AuthService",
    "Err",
    "LoginAttemptTracker",
    "Ok",
    "ServiceResponse",
]
