# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User-facing envelope messages."""

USERNAME_REQUIRED = "Username is required"
PASSWORD_REQUIRED = "Password is required"
USERNAME_TOO_LONG = "Username is too long"
PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters"
USERNAME_EXISTS = "Username already exists"
USER_NOT_FOUND = "User not found"
WRONG_PASSWORD = "Wrong password"
INVALID_CREDENTIALS = "Invalid username or password"
ACCOUNT_LOCKED = "Too many failed attempts, try again later"
