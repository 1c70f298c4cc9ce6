"""Per-destination price broadcast subsystem.

Public API:
    PollingScheduler    - One recurring polling task per destination
    CommandDispatcher   - Maps chat commands onto scheduler operations
    SubscriptionRegistry - Thread-safe set of known destinations
    PriceStateStore     - Sharded store of last delivered price per destination
    decide              - Pure send-on-change-or-heartbeat decision
    QuoteSource, Notifier - Abstract collaborator interfaces
    PriceBotSettings    - Static configuration
    create_quote_source, create_notifier - Env-driven adapter factories
    create_monitor_router - FastAPI router factory for status and SSE
"""

from .config import PriceBotSettings
from .decision import decide, format_price
from .dispatch import CommandDispatcher, parse_command
from .errors import (
    Conflict,
    PriceBotError,
    StateConflictError,
    TransientDeliveryError,
    TransientFetchError,
    ValidationError,
)
from .factory import create_notifier, create_quote_source
from .interface import Notifier, QuoteSource
from .models import Command, CommandKind, Decision, PriceState, TickOutcome
from .registry import SubscriptionRegistry
from .scheduler import PollingScheduler
from .state import PriceStateStore
from .stream import create_monitor_router

__all__ = [
    "PollingScheduler",
    "CommandDispatcher",
    "parse_command",
    "SubscriptionRegistry",
    "PriceStateStore",
    "decide",
    "format_price",
    "QuoteSource",
    "Notifier",
    "PriceBotSettings",
    "create_quote_source",
    "create_notifier",
    "create_monitor_router",
    "Command",
    "CommandKind",
    "Decision",
    "PriceState",
    "TickOutcome",
    "Conflict",
    "PriceBotError",
    "StateConflictError",
    "TransientDeliveryError",
    "TransientFetchError",
    "ValidationError",
]
