"""Fixtures for price broadcast tests."""

import pytest
from fakes import FakeClock, RecordingNotifier

from app.pricebot.config import PriceBotSettings


@pytest.fixture
def settings() -> PriceBotSettings:
    """Long poll interval so only the immediate first tick runs during a test."""
    return PriceBotSettings(poll_interval=60.0, request_timeout=1.0)


@pytest.fixture
def fast_settings() -> PriceBotSettings:
    """Short poll interval for tests that need several ticks."""
    return PriceBotSettings(poll_interval=0.02, request_timeout=0.01)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
