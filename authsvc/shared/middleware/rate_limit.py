# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock

from flask import Flask, Request, current_app, jsonify, request

from authsvc.shared.config import SecurityConfig

_EXTENSION_KEY = "authsvc.rate_limiters"


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._buckets: dict[str, Bucket] = defaultdict(lambda: Bucket(deque(maxlen=self._limit)))
        self._lock = Lock()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            bucket = self._buckets[key]
            # Drop old
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


def _limiter_for(
    name: str, limit: int | None, window_seconds: float | None, limit_key: str
) -> InMemoryRateLimiter:
    registry: dict[str, InMemoryRateLimiter] = current_app.extensions.setdefault(_EXTENSION_KEY, {})
    limiter = registry.get(name)
    if limiter is None:
        limiter = InMemoryRateLimiter(
            limit or current_app.config[limit_key],
            window_seconds or current_app.config["RATE_LIMIT_WINDOW"],
        )
        registry[name] = limiter
    return limiter


def configure_rate_limiting(app: Flask, security: SecurityConfig) -> None:
    app.config.update(
        RATE_LIMIT_ENABLED=security.enable_rate_limit,
        RATE_LIMIT_REQUESTS=security.rate_limit_requests,
        RATE_LIMIT_WINDOW=security.rate_limit_window,
        RATE_LIMIT_REGISTER_REQUESTS=security.register_rate_limit_requests,
    )
    app.extensions[_EXTENSION_KEY] = {}


def rate_limit(
    limit: int | None = None,
    window_seconds: float | None = None,
    *,
    limit_key: str = "RATE_LIMIT_REQUESTS",
):
    """Sliding-window limit per client IP and path.

    Without an explicit limit the app config value under `limit_key` applies,
    read when the first request reaches the view.
    """

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_app.config.get("RATE_LIMIT_ENABLED", False):
                return f(*args, **kwargs)
            limiter = _limiter_for(f.__qualname__, limit, window_seconds, limit_key)
            key = f"{request.path}:{_client_key(request)}"
            if not limiter.allow(key):
                return jsonify({"error": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "configure_rate_limiting", "rate_limit"]
