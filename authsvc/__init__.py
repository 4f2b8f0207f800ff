# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Self-hosted username/password credential service."""

__version__ = "0.1.0"
