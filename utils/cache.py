import threading
import time


class TTLCache:
    """
    In-process cache keyed by string, entries expire `ttl_seconds` after set().
    Shared between request threads, so access is locked.
    """

    def __init__(self, ttl_seconds: float = 60, clock=time.monotonic):
        self.ttl = ttl_seconds
        self._clock = clock
        self._data = {}
        self._lock = threading.Lock()

    def get(self, key: str):
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at > self.ttl:
                del self._data[key]
                return None
            return value

    def set(self, key: str, value) -> None:
        with self._lock:
            self._data[key] = (value, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
