"""Monitoring endpoints: scheduler status and an SSE feed of delivered prices."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from .scheduler import PollingScheduler
from .state import PriceStateStore

logger = logging.getLogger(__name__)


def create_monitor_router(scheduler: PollingScheduler) -> APIRouter:
    """Create the monitoring router bound to ``scheduler``.

    Read-only: nothing here can subscribe, start or stop a destination.
    """
    router = APIRouter(prefix="/api/pricebot", tags=["pricebot"])

    @router.get("/status")
    async def status() -> dict:
        """Subscriptions, live polling tasks and last delivered prices."""
        return {
            "symbol": scheduler.settings.symbol,
            "poll_interval": scheduler.settings.poll_interval,
            "heartbeat_interval": scheduler.settings.heartbeat_interval,
            "subscriptions": scheduler.registry.keys(),
            "polling": scheduler.active_keys(),
            "states": _states_payload(scheduler.store),
        }

    @router.get("/stream")
    async def stream_states(request: Request) -> StreamingResponse:
        """SSE endpoint pushing the price-state snapshot whenever a delivery happens.

        Events look like:

            data: {"@channel": {"last_price": 5.43, "last_sent_at": 1718000000.0}, ...}
        """
        return StreamingResponse(
            _generate_events(scheduler.store, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def _states_payload(store: PriceStateStore) -> dict[str, dict]:
    return {key: state.to_dict() for key, state in sorted(store.snapshot().items())}


async def _generate_events(
    store: PriceStateStore,
    request: Request,
    interval: float = 1.0,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted price-state events.

    Checks the store version every ``interval`` seconds and only emits when
    it changed. Stops when the client disconnects.
    """
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"

    last_version = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            current_version = store.version
            if current_version != last_version:
                last_version = current_version
                payload = _states_payload(store)
                if payload:
                    yield f"data: {json.dumps(payload)}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
