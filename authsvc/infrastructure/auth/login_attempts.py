# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from authsvc.application.interfaces import LoginAttemptTracker
from authsvc.shared.config import LockoutConfig
from authsvc.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker(LoginAttemptTracker):
    def __init__(
        self,
        *,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        window_seconds: float = 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_attempts = max_attempts
        self._lockout_seconds = lockout_seconds
        self._window_seconds = window_seconds
        self._clock = clock
        self._attempts: dict[str, deque[LoginAttempt]] = defaultdict(
            lambda: deque(maxlen=self._max_attempts * 2)
        )
        self._lock = Lock()
        self._lockouts: dict[str, float] = {}  # username -> unlock_time
        self._last_prune = clock()

    @classmethod
    def from_config(cls, config: LockoutConfig) -> LoginAttemptsTracker:
        return cls(
            max_attempts=config.max_attempts,
            lockout_seconds=config.lockout_seconds,
            window_seconds=config.window_seconds,
        )

    def record_attempt(
        self, username: str, success: bool, ip_address: str | None = None
    ) -> None:
        with self._lock:
            self._attempts[username].append(
                LoginAttempt(timestamp=self._clock(), success=success, ip_address=ip_address)
            )

            if success:
                if self._lockouts.pop(username, None) is not None:
                    logger.info(f"login_attempts: cleared lockout for user={username}")
                self._attempts.pop(username, None)
            else:
                self._check_and_lock(username)
            self._prune()

    def is_locked(self, username: str) -> bool:
        with self._lock:
            return self._remaining(username) > 0.0

    def get_lockout_remaining(self, username: str) -> float:
        with self._lock:
            return self._remaining(username)

    def get_failed_attempts_count(self, username: str) -> int:
        with self._lock:
            return len(self._recent_failures(username))

    def clear_attempts(self, username: str) -> None:
        with self._lock:
            self._attempts.pop(username, None)
            self._lockouts.pop(username, None)
            logger.info(f"login_attempts: cleared all attempts for user={username}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)

    def _remaining(self, username: str) -> float:
        unlock_time = self._lockouts.get(username)
        if unlock_time is None:
            return 0.0
        remaining = unlock_time - self._clock()
        if remaining <= 0.0:
            del self._lockouts[username]
            logger.info(f"login_attempts: lockout expired for user={username}")
            return 0.0
        return remaining

    def _recent_failures(self, username: str) -> list[LoginAttempt]:
        if username not in self._attempts:
            return []
        cutoff = self._clock() - self._window_seconds
        return [
            attempt
            for attempt in self._attempts[username]
            if not attempt.success and attempt.timestamp > cutoff
        ]

    def _prune(self) -> None:
        """Forget usernames with no failures inside the window and no active lockout.

        Runs at most once per window, so each key outlives its last failure by
        no more than two windows.
        """
        now = self._clock()
        if now - self._last_prune < self._window_seconds:
            return
        self._last_prune = now
        cutoff = now - self._window_seconds
        for username, unlock_time in list(self._lockouts.items()):
            if unlock_time <= now:
                del self._lockouts[username]
        stale = [
            username
            for username, attempts in self._attempts.items()
            if username not in self._lockouts
            and (not attempts or attempts[-1].timestamp <= cutoff)
        ]
        for username in stale:
            del self._attempts[username]
        if stale:
            logger.debug(f"login_attempts: pruned {len(stale)} idle usernames")

    def _check_and_lock(self, username: str) -> None:
        failed_attempts = self._recent_failures(username)

        if len(failed_attempts) >= self._max_attempts:
            self._lockouts[username] = self._clock() + self._lockout_seconds

            ips = {attempt.ip_address for attempt in failed_attempts if attempt.ip_address}
            logger.warning(
                f"login_attempts: ACCOUNT LOCKED user={username} "
                f"failed_attempts={len(failed_attempts)} "
                f"lockout_duration={self._lockout_seconds}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
