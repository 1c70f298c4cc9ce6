"""Maps inbound chat commands onto scheduler operations.

Text commands, as typed in the chat:

    /start, /help        help text
    /ton @channel        subscribe
    /tonstart @channel   start polling
    /tonstop @channel    stop polling

Anything else, including a malformed channel handle, is dropped without a
reply and without touching any state.
"""

from __future__ import annotations

import logging

from .errors import Conflict, StateConflictError, ValidationError
from .models import Command, CommandKind, validate_destination
from .scheduler import PollingScheduler

logger = logging.getLogger(__name__)

_HELP_WORDS = {"/start", "/help"}

_KEYED_WORDS: dict[str, CommandKind] = {
    "/ton": CommandKind.SUBSCRIBE,
    "/tonstart": CommandKind.START,
    "/tonstop": CommandKind.STOP,
}


def parse_command(text: str | None) -> Command:
    """Parse one chat message into a Command.

    Raises ValidationError for anything that is not a recognized command with
    a well-formed destination key.
    """
    parts = (text or "").split()
    if not parts:
        raise ValidationError("empty message")

    word = parts[0].lower()
    if word in _HELP_WORDS:
        return Command(kind=CommandKind.HELP)

    kind = _KEYED_WORDS.get(word)
    if kind is None:
        raise ValidationError(f"unknown command {parts[0]!r}")
    if len(parts) != 2:
        raise ValidationError(f"{word} expects exactly one destination")

    key = validate_destination(parts[1])
    if key is None:
        raise ValidationError(f"malformed destination {parts[1]!r}")
    return Command(kind=kind, key=key)


class CommandDispatcher:
    """Runs parsed commands against a PollingScheduler and words the reply."""

    def __init__(self, scheduler: PollingScheduler) -> None:
        self._scheduler = scheduler
        self._help_text = _build_help_text(scheduler)

    async def handle_text(self, text: str | None) -> str | None:
        """Parse and execute ``text``. Returns None for dropped input."""
        try:
            command = parse_command(text)
        except ValidationError as e:
            logger.debug("Dropped message: %s", e)
            return None
        return await self.handle(command)

    async def handle(self, command: Command) -> str | None:
        """Execute ``command`` and return the status line for the issuer.

        Returns None, touching nothing, when the command carries no valid key.
        """
        if command.kind is CommandKind.HELP:
            return self._help_text

        key = validate_destination(command.key)
        if key is None:
            logger.debug("Dropped %s command with destination %r", command.kind.value, command.key)
            return None

        try:
            if command.kind is CommandKind.SUBSCRIBE:
                await self._scheduler.subscribe(key)
                return f"✅ Channel {key} added. Use /tonstart {key} to start updates."
            if command.kind is CommandKind.START:
                await self._scheduler.start_polling(key)
                return f"🚀 Started sending updates to {key}"
            await self._scheduler.stop_polling(key)
            return f"🛑 Stopped updates for {key}"
        except StateConflictError as e:
            logger.info("Command %s for %s rejected: %s", command.kind.value, key, e.conflict.value)
            return conflict_message(e)


def conflict_message(error: StateConflictError) -> str:
    """User-facing wording for a rejected lifecycle command."""
    key = error.key
    if error.conflict is Conflict.NOT_SUBSCRIBED:
        return f"❌ Please add the channel first using /ton {key}"
    if error.conflict is Conflict.ALREADY_SUBSCRIBED:
        return f"⚠️ Channel {key} is already added."
    if error.conflict is Conflict.ALREADY_RUNNING:
        return f"⏳ Updates for {key} are already running."
    return f"⚠️ No updates running for {key}"


def _build_help_text(scheduler: PollingScheduler) -> str:
    settings = scheduler.settings
    heartbeat_minutes = settings.heartbeat_interval / 60
    return (
        f"👋 Welcome to the {settings.price_label} Price Bot!\n"
        "\n"
        "💡 Available commands:\n"
        "/ton @channel - add a channel to the tracking list (does not start sending yet)\n"
        f"/tonstart @channel - start sending {settings.price_label} price updates "
        f"every {settings.poll_interval:g} seconds\n"
        "/tonstop @channel - stop sending updates to the channel\n"
        "\n"
        "ℹ️ A new price is sent only if it has changed, "
        f"or every {heartbeat_minutes:g} minutes if it stays the same.\n"
        "⚠️ Make sure the bot is an admin in the target channel!"
    )
