"""Per-destination polling tasks with send-on-change-or-heartbeat delivery."""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Callable

from .config import PriceBotSettings
from .decision import decide, format_price
from .errors import Conflict, StateConflictError, TransientDeliveryError, TransientFetchError
from .interface import Notifier, QuoteSource
from .models import TickOutcome
from .registry import SubscriptionRegistry
from .state import PriceStateStore

logger = logging.getLogger(__name__)


class PollingScheduler:
    """Owns one recurring asyncio task per polling destination.

    Lifecycle per destination:
        await scheduler.subscribe("@channel")      # Unregistered -> Registered
        await scheduler.start_polling("@channel")  # Registered -> Polling
        await scheduler.stop_polling("@channel")   # Polling -> Registered

    Each task ticks immediately and then every ``poll_interval`` seconds.
    Ticks for one destination never overlap: the task awaits the tick body
    before sleeping. Fetch and delivery failures are logged and the task
    simply waits for its next tick.

    Commands for the same destination are serialized by a per-key lock;
    commands for different destinations never wait on each other.
    """

    def __init__(
        self,
        quote_source: QuoteSource,
        notifier: Notifier,
        settings: PriceBotSettings | None = None,
        registry: SubscriptionRegistry | None = None,
        store: PriceStateStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = quote_source
        self._notifier = notifier
        self._settings = settings or PriceBotSettings()
        self._registry = registry if registry is not None else SubscriptionRegistry()
        self._store = store if store is not None else PriceStateStore()
        self._clock = clock
        self._tasks: dict[str, asyncio.Task] = {}
        self._key_locks: dict[str, asyncio.Lock] = {}

    @property
    def settings(self) -> PriceBotSettings:
        return self._settings

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    @property
    def store(self) -> PriceStateStore:
        return self._store

    # --- Commands ---

    async def subscribe(self, key: str) -> None:
        """Make ``key`` eligible for polling.

        Raises StateConflictError(ALREADY_SUBSCRIBED) if it is already known.
        """
        if not self._registry.add(key):
            raise StateConflictError(Conflict.ALREADY_SUBSCRIBED, key)
        logger.info("Subscribed %s", key)

    async def start_polling(self, key: str) -> None:
        """Start the recurring task for a subscribed ``key``.

        Raises StateConflictError(NOT_SUBSCRIBED) for unknown keys and
        StateConflictError(ALREADY_RUNNING) if a live task exists. Neither
        case creates a task.
        """
        # The registry only grows: unknown keys are rejected before a lock exists
        if not self._registry.contains(key):
            raise StateConflictError(Conflict.NOT_SUBSCRIBED, key)
        async with self._lock_for(key):
            if self.is_polling(key):
                raise StateConflictError(Conflict.ALREADY_RUNNING, key)
            self._tasks[key] = asyncio.create_task(self._poll_loop(key), name=f"pricebot-poll-{key}")
        logger.info("Polling started for %s every %.1fs", key, self._settings.poll_interval)

    async def stop_polling(self, key: str) -> None:
        """Cancel the recurring task for ``key`` and wait until it is gone.

        Once this returns no further tick for ``key`` will start. Raises
        StateConflictError(NOT_RUNNING) if there is nothing to stop.
        """
        if not self._registry.contains(key):
            raise StateConflictError(Conflict.NOT_RUNNING, key)
        async with self._lock_for(key):
            task = self._tasks.pop(key, None)
            if task is None or task.done():
                raise StateConflictError(Conflict.NOT_RUNNING, key)
            await self._cancel(task)
        logger.info("Polling stopped for %s", key)

    async def shutdown(self) -> None:
        """Cancel every live task. Safe to call multiple times."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Scheduler shut down (%d tasks cancelled)", len(tasks))

    # --- Liveness ---

    def is_polling(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    def active_keys(self) -> list[str]:
        """Sorted list of destinations with a live polling task."""
        return sorted(key for key, task in self._tasks.items() if not task.done())

    # --- Tick ---

    async def run_tick(self, key: str) -> TickOutcome:
        """Execute one fetch-decide-deliver cycle for ``key``.

        Never raises for fetch or delivery problems; the outcome says what
        happened. Price state is only written after a successful delivery.
        """
        symbol = self._settings.symbol
        try:
            current = await self._fetch(symbol)
        except TransientFetchError as e:
            logger.warning("Quote fetch for %s failed, skipping tick for %s: %s", symbol, key, e)
            return TickOutcome.FETCH_FAILED
        except Exception:
            logger.exception("Unexpected error fetching %s for %s", symbol, key)
            return TickOutcome.FETCH_FAILED

        state = self._store.get(key)
        now = self._clock()
        decision = decide(
            current,
            state.last_price,
            state.last_sent_at,
            now,
            self._settings.heartbeat_interval,
        )
        if not decision.send:
            logger.debug("Suppressed %s for %s (unchanged, heartbeat not due)", current, key)
            return TickOutcome.SUPPRESSED

        text = format_price(current, self._settings.price_label, self._settings.price_suffix)
        try:
            await self._deliver(key, text)
        except TransientDeliveryError as e:
            logger.warning("Delivery to %s failed, will re-evaluate next tick: %s", key, e)
            return TickOutcome.DELIVERY_FAILED
        except Exception:
            logger.exception("Unexpected error delivering to %s", key)
            return TickOutcome.DELIVERY_FAILED

        self._store.record_delivery(key, current, now)
        logger.debug(
            "Sent %s to %s (changed=%s, heartbeat_due=%s)",
            text,
            key,
            decision.changed,
            decision.heartbeat_due,
        )
        return TickOutcome.SENT

    # --- Internal ---

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._key_locks.get(key)
        if lock is None:
            lock = self._key_locks[key] = asyncio.Lock()
        return lock

    async def _poll_loop(self, key: str) -> None:
        """Tick now, then keep a fixed cadence. The tick time counts toward the period."""
        loop = asyncio.get_running_loop()
        interval = self._settings.poll_interval
        while True:
            started = loop.time()
            await self.run_tick(key)
            elapsed = loop.time() - started
            await asyncio.sleep(max(0.0, interval - elapsed))

    async def _fetch(self, symbol: str) -> float:
        timeout = self._settings.request_timeout
        try:
            async with asyncio.timeout(timeout):
                price = float(await self._source.fetch(symbol))
        except TimeoutError as e:
            raise TransientFetchError(f"quote fetch timed out after {timeout:.1f}s", symbol=symbol) from e
        if not math.isfinite(price):
            raise TransientFetchError(f"quote source returned {price} for {symbol}", symbol=symbol)
        return price

    async def _deliver(self, key: str, text: str) -> None:
        timeout = self._settings.request_timeout
        try:
            async with asyncio.timeout(timeout):
                await self._notifier.send(key, text)
        except TimeoutError as e:
            raise TransientDeliveryError(f"delivery timed out after {timeout:.1f}s", destination=key) from e

    @staticmethod
    async def _cancel(task: asyncio.Task) -> None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
