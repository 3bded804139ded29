"""Fan-in of several tick sources into synchronized batches.

The multiplexer keeps the latest tick of every attached source. Each new tick
publishes the list of latest ticks from all sources heard from so far to every
subscription, so a batch only carries one tick per source once all sources
have reported.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from zscore_monitor.errors import SubscriptionError
from zscore_monitor.metrics.prometheus import SUBSCRIPTION_OVERFLOWS
from zscore_monitor.models.tick import RawTick

logger = logging.getLogger(__name__)

Publish = Callable[[RawTick], None]


class Streamer(Protocol):
    name: str

    async def run(self, publish: Publish) -> None: ...

    def request_shutdown(self) -> None: ...


class Subscription:
    """Bounded queue of tick batches. Drops the oldest batch when full."""

    def __init__(self, name: str, maxsize: int) -> None:
        self.name = name
        self._queue: asyncio.Queue[list[RawTick]] = asyncio.Queue(maxsize=maxsize)

    def put(self, batch: list[RawTick]) -> None:
        if self._queue.full():
            self._queue.get_nowait()
            SUBSCRIPTION_OVERFLOWS.labels(subscription=self.name).inc()
            logger.debug("Subscription %s full, discarded oldest batch", self.name)
        self._queue.put_nowait(batch)

    async def get(self) -> list[RawTick]:
        return await self._queue.get()

    def qsize(self) -> int:
        return self._queue.qsize()


class Multiplexer:
    def __init__(self, queue_size: int = 64) -> None:
        self._queue_size = queue_size
        self._streamers: dict[str, Streamer] = {}
        self._latest: dict[str, RawTick] = {}
        self._subscriptions: dict[str, Subscription] = {}

    @property
    def source_count(self) -> int:
        return len(self._streamers)

    def attach(self, streamer: Streamer) -> None:
        if streamer.name in self._streamers:
            raise ValueError(f"streamer {streamer.name!r} already attached")
        self._streamers[streamer.name] = streamer
        logger.info("Attached streamer %s", streamer.name)

    def subscribe(self, name: str) -> Subscription:
        """Create a named subscription. Raises SubscriptionError on failure."""
        if not self._streamers:
            raise SubscriptionError(f"cannot subscribe {name!r}: no streamers attached")
        if name in self._subscriptions:
            raise SubscriptionError(f"subscription {name!r} already exists")
        sub = Subscription(name, self._queue_size)
        self._subscriptions[name] = sub
        logger.info("Subscription %s created (%d sources)", name, len(self._streamers))
        return sub

    def publish(self, tick: RawTick) -> None:
        """Record a source's latest tick and fan the current batch out."""
        if tick.source not in self._streamers:
            logger.warning("Ignoring tick from unattached source %s", tick.source)
            return
        self._latest[tick.source] = tick

        # Attach order keeps batch ordering stable across publishes
        batch = [self._latest[name] for name in self._streamers if name in self._latest]
        for sub in self._subscriptions.values():
            sub.put(batch)

    async def run(self) -> None:
        """Run all attached streamers until they finish."""
        await asyncio.gather(*(s.run(self.publish) for s in self._streamers.values()))

    def request_shutdown(self) -> None:
        for streamer in self._streamers.values():
            streamer.request_shutdown()
