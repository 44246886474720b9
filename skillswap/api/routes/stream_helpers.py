"""Stream Helpers — SSE framing and the snapshot-on-change loop.

Invariants:
    - Each SSE event is a single "data: {json}\\n\\n" frame
    - The first frame is a full snapshot, sent before waiting on any change
    - Each snapshot reads through a fresh DB session (no long-lived session per stream)
    - A ": keepalive" comment goes out when nothing changed for keepalive seconds
    - The loop ends when the client disconnects

Design Decisions:
    - Broadcaster wake-ups carry no data; the loop re-reads state, so a missed
      or coalesced wake-up never loses an update
"""

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Hashable

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.infrastructure import database
from skillswap.infrastructure.broadcaster import ChangeBroadcaster

logger = logging.getLogger(__name__)

# SSE headers prevent proxy/browser buffering of streamed events.
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}

KEEPALIVE = ": keepalive\n\n"


def sse_line(data: dict) -> str:
    return f"data: {json.dumps(data, default=str)}\n\n"


async def snapshot_stream(
    request: Request,
    events: ChangeBroadcaster,
    topic: Hashable,
    load: Callable[[AsyncSession], Awaitable[Any]],
    keepalive: float,
) -> AsyncIterator[str]:
    """Yield load()'s snapshot now and again after every change on topic."""
    async with events.subscribe(topic) as queue:
        while True:
            async with database.db_manager.session() as db:
                snapshot = await load(db)
            yield sse_line(snapshot)
            while True:
                if await request.is_disconnected():
                    logger.debug(f"{events.name} stream closed by client")
                    return
                try:
                    await asyncio.wait_for(queue.get(), timeout=keepalive)
                    break
                except asyncio.TimeoutError:
                    yield KEEPALIVE
