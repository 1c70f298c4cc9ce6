"""Data models for the price broadcast scheduler."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Telegram channel handles: "@" followed by ASCII word characters
DESTINATION_PATTERN = re.compile(r"@(\w+)", re.ASCII)


def validate_destination(raw: str | None) -> str | None:
    """Return ``raw`` if it is a well-formed destination key, else None."""
    if raw is None:
        return None
    return raw if DESTINATION_PATTERN.fullmatch(raw) else None


@dataclass(frozen=True, slots=True)
class PriceState:
    """Last delivered price for one destination.

    ``last_sent_at`` is Unix seconds; 0.0 means nothing was ever delivered.
    """

    last_price: float | None = None
    last_sent_at: float = 0.0

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "last_price": self.last_price,
            "last_sent_at": self.last_sent_at,
        }


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of the send-on-change-or-heartbeat policy for one tick."""

    send: bool
    changed: bool
    heartbeat_due: bool


class TickOutcome(str, Enum):
    SENT = "sent"
    SUPPRESSED = "suppressed"
    FETCH_FAILED = "fetch_failed"
    DELIVERY_FAILED = "delivery_failed"


class CommandKind(str, Enum):
    SUBSCRIBE = "subscribe"
    START = "start"
    STOP = "stop"
    HELP = "help"


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed inbound command. ``key`` is None only for HELP."""

    kind: CommandKind
    key: str | None = None
