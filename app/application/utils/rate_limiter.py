from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Bucket:
    tokens: float
    updated_at: float


class TokenBucketRateLimiter:
    """
    Per-client token bucket.

    Buckets start full (`burst` tokens) and refill continuously at
    `requests_per_minute / 60` tokens per second, capped at `burst`.
    State is process-local. Buckets untouched for `idle_seconds` are
    dropped on the next sweep; a dropped bucket comes back full, which is
    what it would have refilled to anyway once idle long enough.
    """

    def __init__(
        self,
        requests_per_minute: int,
        burst: int,
        idle_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute must be positive")
        if burst <= 0:
            raise ValueError("burst must be positive")
        self._capacity = float(burst)
        self._refill_per_second = requests_per_minute / 60.0
        self._idle_seconds = idle_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._buckets: dict[str, _Bucket] = {}
        self._last_sweep = clock()

    def allow(self, client_key: str) -> bool:
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self._idle_seconds:
                self._evict_idle_locked(now)

            bucket = self._buckets.get(client_key)
            if bucket is None:
                bucket = _Bucket(tokens=self._capacity, updated_at=now)
                self._buckets[client_key] = bucket
            else:
                elapsed = max(0.0, now - bucket.updated_at)
                bucket.tokens = min(self._capacity, bucket.tokens + elapsed * self._refill_per_second)
                bucket.updated_at = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                return True
            return False

    def evict_idle(self) -> int:
        """Drop buckets idle past the horizon. Returns how many were removed."""
        with self._lock:
            return self._evict_idle_locked(self._clock())

    def _evict_idle_locked(self, now: float) -> int:
        stale = [key for key, bucket in self._buckets.items() if now - bucket.updated_at >= self._idle_seconds]
        for key in stale:
            del self._buckets[key]
        self._last_sweep = now
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
