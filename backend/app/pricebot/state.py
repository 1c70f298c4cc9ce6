"""Sharded in-memory store of per-destination price state."""

from __future__ import annotations

from threading import Lock

from .models import PriceState


class _Shard:
    __slots__ = ("lock", "states")

    def __init__(self) -> None:
        self.lock = Lock()
        self.states: dict[str, PriceState] = {}


class PriceStateStore:
    """Last delivered price and delivery time for each destination.

    Writers: the polling task that owns the destination (one at a time).
    Readers: that same task, plus the monitoring router.

    Keys are spread over independent shards so that tasks for unrelated
    destinations never wait on each other's lock. Locks are only held for the
    dict operation itself, never across I/O.
    """

    def __init__(self, shard_count: int = 16) -> None:
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self._shards = [_Shard() for _ in range(shard_count)]
        self._version_lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every write

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def get(self, key: str) -> PriceState:
        """State for ``key``; an empty PriceState if nothing was delivered yet."""
        shard = self._shard_for(key)
        with shard.lock:
            return shard.states.get(key) or PriceState()

    def record_delivery(self, key: str, price: float, sent_at: float) -> PriceState:
        """Store ``price`` as delivered to ``key`` at ``sent_at``."""
        state = PriceState(last_price=price, last_sent_at=sent_at)
        shard = self._shard_for(key)
        with shard.lock:
            shard.states[key] = state
        with self._version_lock:
            self._version += 1
        return state

    def snapshot(self) -> dict[str, PriceState]:
        """Copy of every stored state. Each shard is copied under its own lock."""
        result: dict[str, PriceState] = {}
        for shard in self._shards:
            with shard.lock:
                result.update(shard.states)
        return result

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def __len__(self) -> int:
        return sum(len(shard.states) for shard in self._shards)

    def __contains__(self, key: str) -> bool:
        shard = self._shard_for(key)
        with shard.lock:
            return key in shard.states
