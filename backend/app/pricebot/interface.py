"""Abstract interfaces for the scheduler's external collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod


class QuoteSource(ABC):
    """Contract for price providers.

    The scheduler calls ``fetch`` once per tick for every polling destination,
    so implementations must tolerate concurrent calls. Failures are signalled
    by raising (preferably ``TransientFetchError``); the scheduler logs them
    and waits for the next tick.

    Lifecycle:
        source = create_quote_source(settings)
        price = await source.fetch("TONUSDT")
        # ... app shutting down ...
        await source.aclose()
    """

    @abstractmethod
    async def fetch(self, symbol: str) -> float:
        """Return the current price for ``symbol``."""

    async def aclose(self) -> None:
        """Release network resources. Safe to call multiple times."""


class Notifier(ABC):
    """Contract for outbound delivery of a text payload to a destination."""

    @abstractmethod
    async def send(self, destination: str, text: str) -> None:
        """Deliver ``text`` to ``destination``.

        Raises on failure (preferably ``TransientDeliveryError``). A failed
        send leaves the destination's price state untouched, so the next tick
        re-evaluates and usually retries.
        """

    async def aclose(self) -> None:
        """Release network resources. Safe to call multiple times."""
