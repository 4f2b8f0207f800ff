# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .error_handler import configure_error_handling
from .rate_limit import configure_rate_limiting, rate_limit
from .request_logger import configure_request_logging

__all__ = [
    "configure_error_handling",
    "configure_rate_limiting",
    "configure_request_logging",
    "rate_limit",
]
