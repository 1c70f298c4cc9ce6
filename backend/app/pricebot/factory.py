"""Factories for the scheduler's external collaborators."""

from __future__ import annotations

import logging

from .config import PriceBotSettings
from .interface import Notifier, QuoteSource

logger = logging.getLogger(__name__)


def create_quote_source(settings: PriceBotSettings) -> QuoteSource:
    """Create the quote source selected by ``settings``.

    - settings.simulate → SimulatedQuoteSource (GBM simulation, no network)
    - Otherwise → BinanceQuoteSource (real market data)
    """
    if settings.simulate:
        from .simulator import SimulatedQuoteSource

        logger.info("Quote source: GBM simulator")
        return SimulatedQuoteSource()

    from .binance_client import BinanceQuoteSource

    logger.info("Quote source: Binance (%s)", settings.quote_base_url)
    return BinanceQuoteSource(base_url=settings.quote_base_url, timeout=settings.request_timeout)


def create_notifier(settings: PriceBotSettings) -> Notifier:
    """Create the notifier selected by ``settings``.

    - settings.telegram_token set and non-blank → TelegramNotifier
    - Otherwise → LoggingNotifier (messages only go to the log)
    """
    token = settings.telegram_token.strip()
    if token:
        from .telegram_notifier import TelegramNotifier

        logger.info("Notifier: Telegram Bot API")
        return TelegramNotifier(token=token, timeout=settings.request_timeout)

    from .telegram_notifier import LoggingNotifier

    logger.info("Notifier: log only (TELEGRAM_BOT_TOKEN not set)")
    return LoggingNotifier()
