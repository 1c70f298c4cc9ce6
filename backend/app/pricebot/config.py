"""Static configuration for the price broadcast scheduler."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class PriceBotSettings:
    """Timing, symbol and display settings shared by every polling task."""

    poll_interval: float = 30.0
    """Seconds between two ticks for the same destination."""

    heartbeat_interval: float = 120.0
    """Maximum seconds between deliveries when the price does not move."""

    symbol: str = "TONUSDT"
    price_label: str = "TON"
    price_suffix: str = "$"

    request_timeout: float = 10.0
    """Upper bound for each quote fetch and each delivery. Must be shorter
    than ``poll_interval`` so a hung call cannot overlap the next tick."""

    quote_base_url: str = "https://api.binance.com"
    telegram_token: str = field(default="", repr=False)
    simulate: bool = False

    def __post_init__(self) -> None:
        if self.poll_interval <= 0 or self.heartbeat_interval <= 0:
            raise ValueError("poll_interval and heartbeat_interval must be positive")
        if not 0 < self.request_timeout < self.poll_interval:
            raise ValueError(
                f"request_timeout ({self.request_timeout}s) must be positive and "
                f"shorter than poll_interval ({self.poll_interval}s)"
            )

    @classmethod
    def from_env(cls) -> PriceBotSettings:
        """Build settings from PRICEBOT_* variables, falling back to defaults.

        - PRICEBOT_POLL_INTERVAL, PRICEBOT_HEARTBEAT_INTERVAL, PRICEBOT_REQUEST_TIMEOUT
        - PRICEBOT_SYMBOL, PRICEBOT_PRICE_LABEL, PRICEBOT_PRICE_SUFFIX
        - PRICEBOT_QUOTE_BASE_URL
        - PRICEBOT_SIMULATE (1/true/yes/on)
        - TELEGRAM_BOT_TOKEN
        """
        env = os.environ
        defaults = cls()
        return cls(
            poll_interval=float(env.get("PRICEBOT_POLL_INTERVAL", defaults.poll_interval)),
            heartbeat_interval=float(env.get("PRICEBOT_HEARTBEAT_INTERVAL", defaults.heartbeat_interval)),
            symbol=env.get("PRICEBOT_SYMBOL", defaults.symbol).strip().upper(),
            price_label=env.get("PRICEBOT_PRICE_LABEL", defaults.price_label),
            price_suffix=env.get("PRICEBOT_PRICE_SUFFIX", defaults.price_suffix),
            request_timeout=float(env.get("PRICEBOT_REQUEST_TIMEOUT", defaults.request_timeout)),
            quote_base_url=env.get("PRICEBOT_QUOTE_BASE_URL", defaults.quote_base_url),
            telegram_token=env.get("TELEGRAM_BOT_TOKEN", "").strip(),
            simulate=env.get("PRICEBOT_SIMULATE", "").strip().lower() in _TRUTHY,
        )
