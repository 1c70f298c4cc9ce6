"""Exception hierarchy for the price broadcast subsystem."""

from __future__ import annotations

from enum import Enum


class PriceBotError(Exception):
    """Base error for everything raised by app.pricebot."""


class ValidationError(PriceBotError):
    """Malformed destination key or unrecognized command text."""


class Conflict(str, Enum):
    """Why a lifecycle command could not be applied to a destination."""

    NOT_SUBSCRIBED = "not_subscribed"
    ALREADY_SUBSCRIBED = "already_subscribed"
    ALREADY_RUNNING = "already_running"
    NOT_RUNNING = "not_running"


class StateConflictError(PriceBotError):
    """A subscribe/start/stop command does not fit the destination's state.

    Recoverable: nothing was mutated, the caller reports it back to whoever
    issued the command.
    """

    def __init__(self, conflict: Conflict, key: str) -> None:
        self.conflict = conflict
        self.key = key
        super().__init__(f"{key}: {conflict.value}")


class TransientFetchError(PriceBotError):
    """The quote source failed or timed out. The tick is skipped."""

    def __init__(self, message: str, *, symbol: str = "") -> None:
        self.symbol = symbol
        super().__init__(message)


class TransientDeliveryError(PriceBotError):
    """The notifier failed or timed out. Price state is left untouched."""

    def __init__(self, message: str, *, destination: str = "") -> None:
        self.destination = destination
        super().__init__(message)
