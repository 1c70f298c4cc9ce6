"""Tests for the quote source and notifier factories."""

import os
from unittest.mock import patch

from app.pricebot.binance_client import BinanceQuoteSource
from app.pricebot.config import PriceBotSettings
from app.pricebot.factory import create_notifier, create_quote_source
from app.pricebot.simulator import SimulatedQuoteSource
from app.pricebot.telegram_notifier import LoggingNotifier, TelegramNotifier


class TestCreateQuoteSource:
    """Tests for create_quote_source."""

    def test_creates_binance_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            source = create_quote_source(PriceBotSettings.from_env())

        assert isinstance(source, BinanceQuoteSource)

    def test_creates_simulator_when_requested(self):
        with patch.dict(os.environ, {"PRICEBOT_SIMULATE": "1"}, clear=True):
            source = create_quote_source(PriceBotSettings.from_env())

        assert isinstance(source, SimulatedQuoteSource)

    def test_binance_receives_base_url(self):
        settings = PriceBotSettings(quote_base_url="https://api.binance.us/")
        source = create_quote_source(settings)

        assert isinstance(source, BinanceQuoteSource)
        assert source._base_url == "https://api.binance.us"


class TestCreateNotifier:
    """Tests for create_notifier."""

    def test_logging_notifier_when_no_token(self):
        with patch.dict(os.environ, {}, clear=True):
            notifier = create_notifier(PriceBotSettings.from_env())

        assert isinstance(notifier, LoggingNotifier)

    def test_logging_notifier_when_token_whitespace(self):
        with patch.dict(os.environ, {"TELEGRAM_BOT_TOKEN": "   "}, clear=True):
            notifier = create_notifier(PriceBotSettings.from_env())

        assert isinstance(notifier, LoggingNotifier)

    def test_logging_notifier_when_settings_token_whitespace(self):
        notifier = create_notifier(PriceBotSettings(telegram_token="  "))

        assert isinstance(notifier, LoggingNotifier)

    def test_telegram_notifier_when_token_set(self):
        with patch.dict(os.environ, {"TELEGRAM_BOT_TOKEN": "123:abc"}, clear=True):
            notifier = create_notifier(PriceBotSettings.from_env())

        assert isinstance(notifier, TelegramNotifier)
        assert notifier._token == "123:abc"
