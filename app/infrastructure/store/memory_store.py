from __future__ import annotations

import threading
import time
from typing import Callable

from app.application.ports.session_store import SessionStorePort
from app.domain.entities.session_record import SessionRecord


class MemorySessionStore(SessionStorePort):
    """In-process store with per-key expiry. Records are immutable, so no copies are needed."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._records: dict[str, tuple[SessionRecord, float]] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, session_key: str) -> SessionRecord | None:
        with self._lock:
            entry = self._records.get(session_key)
            if entry is None:
                return None
            record, expires_at = entry
            if self._clock() >= expires_at:
                del self._records[session_key]
                return None
            return record

    def set(self, session_key: str, record: SessionRecord, ttl_seconds: int) -> None:
        with self._lock:
            self._records[session_key] = (record, self._clock() + ttl_seconds)

    def delete(self, session_key: str) -> None:
        with self._lock:
            self._records.pop(session_key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
