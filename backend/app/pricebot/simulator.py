"""GBM-based quote simulator for running without network access."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from threading import Lock

import numpy as np

from .errors import TransientFetchError
from .interface import QuoteSource
from .seed_prices import DEFAULT_PARAMS, SEED_PRICES, SYMBOL_PARAMS, UNKNOWN_SEED_RANGE

logger = logging.getLogger(__name__)


class GBMSimulator:
    """Geometric Brownian Motion price paths, one per symbol.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = current price
        mu     = annualized drift (expected return)
        sigma  = annualized volatility
        dt     = elapsed wall-clock time as a fraction of a year
        Z      = standard normal random variable

    Crypto trades around the clock, so a year is 365 * 24 * 3600 seconds.
    Prices only move when time has passed: several destinations quoting the
    same symbol within one instant all see the same price.
    """

    SECONDS_PER_YEAR = 365 * 24 * 3600

    def __init__(
        self,
        event_probability: float = 0.001,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event_prob = event_probability
        self._rng = np.random.default_rng(seed)
        self._clock = clock
        self._lock = Lock()

        # Per-symbol state
        self._prices: dict[str, float] = {}
        self._params: dict[str, dict[str, float]] = {}
        self._last_step: dict[str, float] = {}

    # --- Public API ---

    def quote(self, symbol: str) -> float:
        """Advance ``symbol`` to now and return its price rounded to cents."""
        with self._lock:
            if symbol not in self._prices:
                self._add_symbol(symbol)
            else:
                self._advance(symbol)
            return round(self._prices[symbol], 2)

    def get_price(self, symbol: str) -> float | None:
        """Current unrounded price for a symbol, or None if never quoted."""
        return self._prices.get(symbol)

    def symbols(self) -> list[str]:
        return list(self._prices)

    # --- Internals ---

    def _add_symbol(self, symbol: str) -> None:
        low, high = UNKNOWN_SEED_RANGE
        self._prices[symbol] = SEED_PRICES.get(symbol, float(self._rng.uniform(low, high)))
        self._params[symbol] = SYMBOL_PARAMS.get(symbol, dict(DEFAULT_PARAMS))
        self._last_step[symbol] = self._clock()

    def _advance(self, symbol: str) -> None:
        now = self._clock()
        elapsed = now - self._last_step[symbol]
        if elapsed <= 0:
            return
        self._last_step[symbol] = now

        dt = elapsed / self.SECONDS_PER_YEAR
        mu = self._params[symbol]["mu"]
        sigma = self._params[symbol]["sigma"]
        z = self._rng.standard_normal()

        drift = (mu - 0.5 * sigma**2) * dt
        diffusion = sigma * math.sqrt(dt) * z
        self._prices[symbol] *= math.exp(drift + diffusion)

        # Random event: a sudden 2-5% jump in either direction
        if self._rng.random() < self._event_prob:
            shock_magnitude = self._rng.uniform(0.02, 0.05)
            shock_sign = 1 if self._rng.random() < 0.5 else -1
            self._prices[symbol] *= 1 + shock_magnitude * shock_sign
            logger.debug(
                "Random event on %s: %.1f%% %s",
                symbol,
                shock_magnitude * 100,
                "up" if shock_sign > 0 else "down",
            )


class SimulatedQuoteSource(QuoteSource):
    """QuoteSource backed by the GBM simulator.

    ``failure_probability`` makes a fraction of fetches raise
    TransientFetchError, to watch the scheduler ride out an outage.
    """

    def __init__(
        self,
        simulator: GBMSimulator | None = None,
        failure_probability: float = 0.0,
        seed: int | None = None,
    ) -> None:
        self._sim = simulator or GBMSimulator(seed=seed)
        self._failure_prob = failure_probability
        self._rng = np.random.default_rng(seed)

    @property
    def simulator(self) -> GBMSimulator:
        return self._sim

    async def fetch(self, symbol: str) -> float:
        symbol = symbol.upper().strip()
        if self._failure_prob and self._rng.random() < self._failure_prob:
            raise TransientFetchError(f"simulated outage for {symbol}", symbol=symbol)
        return self._sim.quote(symbol)
