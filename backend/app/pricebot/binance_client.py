"""Binance public REST API quote source."""

from __future__ import annotations

import logging
import math

import httpx

from .errors import TransientFetchError
from .interface import QuoteSource

logger = logging.getLogger(__name__)


class BinanceQuoteSource(QuoteSource):
    """QuoteSource backed by GET /api/v3/ticker/price.

    The endpoint is unauthenticated and returns ``{"symbol": ..., "price": "5.43210000"}``.
    One shared AsyncClient serves every polling task; it is created on first
    use so constructing the source never touches the network.
    """

    TICKER_PATH = "/api/v3/ticker/price"

    def __init__(
        self,
        base_url: str = "https://api.binance.com",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def fetch(self, symbol: str) -> float:
        symbol = symbol.upper().strip()
        client = self._get_client()
        try:
            response = await client.get(f"{self._base_url}{self.TICKER_PATH}", params={"symbol": symbol})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransientFetchError(f"Binance request for {symbol} failed: {e}", symbol=symbol) from e

        try:
            price = float(payload["price"])
        except (KeyError, TypeError, ValueError) as e:
            raise TransientFetchError(f"Binance returned no usable price for {symbol}: {payload!r}", symbol=symbol) from e
        if not math.isfinite(price):
            raise TransientFetchError(f"Binance returned non-finite price for {symbol}: {price}", symbol=symbol)

        logger.debug("Binance %s = %s", symbol, price)
        return price

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client
