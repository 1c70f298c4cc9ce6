"""Send-on-change-or-heartbeat delivery policy."""

from __future__ import annotations

from .models import Decision


def decide(
    current: float,
    last: float | None,
    last_sent_at: float,
    now: float,
    heartbeat_interval: float = 120.0,
) -> Decision:
    """Decide whether a tick should deliver ``current``.

    Delivers when the price differs from the last delivered one, or when
    ``heartbeat_interval`` seconds have passed since the last delivery.
    A missing ``last`` price always counts as a change.

    The comparison is exact. Two quotes that round to the same display
    string but differ in the last bits are still a change.
    """
    changed = last is None or current != last
    heartbeat_due = (now - last_sent_at) >= heartbeat_interval
    return Decision(send=changed or heartbeat_due, changed=changed, heartbeat_due=heartbeat_due)


def format_price(price: float, label: str = "TON", suffix: str = "$") -> str:
    """Display string sent to destinations, e.g. ``TON Price: 5.43$``."""
    return f"{label} Price: {price:.2f}{suffix}"
