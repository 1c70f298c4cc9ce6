"""Thread-safe set of destinations eligible for polling."""

from __future__ import annotations

from threading import Lock


class SubscriptionRegistry:
    """Known destination keys. Keys are added once and never removed."""

    def __init__(self) -> None:
        self._keys: set[str] = set()
        self._lock = Lock()

    def add(self, key: str) -> bool:
        """Insert ``key`` if absent. Returns True only when newly inserted."""
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._keys

    def keys(self) -> list[str]:
        """Sorted snapshot of all known keys."""
        with self._lock:
            return sorted(self._keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)

    def __contains__(self, key: str) -> bool:
        return self.contains(key)
