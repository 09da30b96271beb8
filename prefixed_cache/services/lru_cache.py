from collections import OrderedDict
from copy import deepcopy
from threading import RLock
from typing import Any, Optional, Tuple
import time

MISSING = object()


class LRUCacheImpl:
    """
    Thread-safe LRU cache with optional per-entry TTL.
    Values are stored as deep copies to avoid accidental mutation.
    """
    def __init__(self, capacity: int = 10_000):
        self.capacity = max(1, capacity)
        self._data: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = RLock()

    def get(self, key: str, default: Any = MISSING) -> Any:
        """Return the live value for `key`, or `default` (MISSING unless given) on a miss."""
        now = time.time()
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return default
            expires_at, value = item
            if expires_at and expires_at <= now:
                # Expired: evict and miss
                self._data.pop(key, None)
                return default
            # Move to MRU
            self._data.move_to_end(key)
            return deepcopy(value)

    def has(self, key: str) -> bool:
        """Presence check that does not change recency."""
        now = time.time()
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return False
            expires_at, _ = item
            if expires_at and expires_at <= now:
                self._data.pop(key, None)
                return False
            return True

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            # Already expired
            self.delete(key)
            return
        expires_at = time.time() + ttl_seconds if ttl_seconds else 0.0
        with self._lock:
            if key in self._data:
                self._data.pop(key)
            elif len(self._data) >= self.capacity:
                self._data.popitem(last=False)  # Evict LRU
            self._data[key] = (expires_at, deepcopy(value))

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
