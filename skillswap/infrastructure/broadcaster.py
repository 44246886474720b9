"""Change Broadcaster — in-process fan-out that backs the live request/message streams.

Invariants:
    - publish() never blocks: a subscriber whose queue is full just misses the
      wake-up (it already has one pending, which triggers a fresh snapshot)
    - Subscriptions are removed when the subscribe() context exits
    - Subscribers receive a wake-up token, not data; they re-read state themselves

Design Decisions:
    - Module-level singletons (request_events, message_events): single-process
      uvicorn, no cross-worker fan-out
"""

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable

logger = logging.getLogger(__name__)

ALL = "all"


class ChangeBroadcaster:
    """Topic-keyed set of asyncio queues."""

    def __init__(self, name: str):
        self.name = name
        self._subscribers: dict[Hashable, set[asyncio.Queue]] = defaultdict(set)

    @asynccontextmanager
    async def subscribe(self, topic: Hashable = ALL) -> AsyncIterator[asyncio.Queue]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._subscribers[topic].add(queue)
        logger.debug(f"{self.name}: subscribed to {topic}")
        try:
            yield queue
        finally:
            self._subscribers[topic].discard(queue)
            if not self._subscribers[topic]:
                del self._subscribers[topic]

    def publish(self, topic: Hashable = ALL) -> int:
        """Wake every subscriber of topic. Returns how many were woken."""
        woken = 0
        for queue in list(self._subscribers.get(topic, ())):
            try:
                queue.put_nowait(topic)
                woken += 1
            except asyncio.QueueFull:
                pass
        return woken

    def subscriber_count(self, topic: Hashable = ALL) -> int:
        return len(self._subscribers.get(topic, ()))


request_events = ChangeBroadcaster("requests")
message_events = ChangeBroadcaster("messages")
