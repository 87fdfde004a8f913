from __future__ import annotations

import threading
from collections import OrderedDict


class RecentIds:
    """Bounded set of recently seen gateway message ids (redelivery guard)."""

    def __init__(self, limit: int = 5000) -> None:
        self._limit = limit
        self._ids: OrderedDict[str, None] = OrderedDict()
        self._lock = threading.Lock()

    def claim(self, message_id: str) -> bool:
        """Return True the first time an id is seen, False afterwards."""
        with self._lock:
            if message_id in self._ids:
                return False
            self._ids[message_id] = None
            if len(self._ids) > self._limit:
                self._ids.popitem(last=False)
            return True
