"""Score engine: subscription → batch barrier → convert → z-score → printer."""

import asyncio
import logging
import threading
import time
from typing import Protocol

from zscore_monitor.errors import ScoreError
from zscore_monitor.metrics.prometheus import (
    BATCHES_DROPPED,
    BATCHES_RECEIVED,
    OUTLIER_LEVELS,
    TICK_ERRORS,
    TICK_LATENCY,
    TICKS_SCORED,
)
from zscore_monitor.models.orderbook import OrderBook, convert
from zscore_monitor.models.tick import RawTick
from zscore_monitor.printer.printer import Printer
from zscore_monitor.stats.zscore import check_level_count, compute_zscores, is_outlier

logger = logging.getLogger(__name__)


class TickSubscription(Protocol):
    async def get(self) -> list[RawTick]: ...


class ScoreEngine:
    """Scores every tick of each complete batch and hands the book to the printer.

    ``running`` guards against a second concurrent ``run``; ``healthy`` is set
    once the first synchronized batch has been processed.
    """

    def __init__(
        self,
        printer: Printer,
        level_count: int = 20,
        sort_levels: bool = True,
        strict_level_count: bool = False,
        outliers_detection: float = 1.5,
    ) -> None:
        self._printer = printer
        self._level_count = level_count
        self._sort_levels = sort_levels
        self._strict_level_count = strict_level_count
        self._outliers_detection = outliers_detection
        self._running = threading.Event()
        self._healthy = threading.Event()

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def healthy(self) -> bool:
        return self._healthy.is_set()

    async def run(
        self,
        subscription: TickSubscription,
        expected_source_count: int,
        stop: asyncio.Event | None = None,
    ) -> None:
        """Consume batches until ``stop`` is set or the task is cancelled."""
        if self._running.is_set():
            logger.warning("Score engine is already running")
            return
        self._running.set()
        logger.info("Score engine started (expecting %d sources)", expected_source_count)

        try:
            while True:
                batch = await self._next_batch(subscription, stop)
                if batch is None:
                    return
                self.process_batch(batch, expected_source_count)
        finally:
            self._running.clear()
            logger.info("Score engine stopped")

    @staticmethod
    async def _next_batch(
        subscription: TickSubscription, stop: asyncio.Event | None
    ) -> list[RawTick] | None:
        """Wait for the next batch, or return None once ``stop`` is set."""
        if stop is None:
            return await subscription.get()
        if stop.is_set():
            return None

        get_task = asyncio.ensure_future(subscription.get())
        stop_task = asyncio.ensure_future(stop.wait())
        try:
            done, _ = await asyncio.wait({get_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (get_task, stop_task):
                if not task.done():
                    task.cancel()

        # A batch already taken from the queue is processed; stop is seen on the next call
        if get_task in done:
            return get_task.result()
        return None

    def process_batch(self, batch: list[RawTick], expected_source_count: int) -> bool:
        """Score a batch if it holds exactly one tick per source. Returns whether it was processed."""
        BATCHES_RECEIVED.inc()
        if len(batch) != expected_source_count:
            BATCHES_DROPPED.inc()
            logger.debug("Dropping batch of %d ticks (expected %d)", len(batch), expected_source_count)
            return False

        for tick in batch:
            self.process_tick(tick)

        if not self._healthy.is_set():
            logger.info("Score engine receiving ticks and operational")
            self._healthy.set()
        return True

    def process_tick(self, tick: RawTick) -> OrderBook | None:
        """Convert, score and print one tick. Scoring errors are logged and the tick skipped."""
        start = time.monotonic()
        book = convert(tick, sort_levels=self._sort_levels)

        try:
            if self._strict_level_count:
                check_level_count(book, self._level_count)
            compute_zscores(book, self._level_count)
        except ScoreError as exc:
            TICK_ERRORS.labels(kind=exc.kind).inc()
            logger.warning("Skipping tick from %s: %s [%s]", tick.source, exc, exc.kind)
            return None

        self._count_outliers(book)
        self._printer.print(book)

        TICKS_SCORED.inc()
        TICK_LATENCY.observe(time.monotonic() - start)
        return book

    def _count_outliers(self, book: OrderBook) -> None:
        for side, levels in (("bids", book.bids), ("asks", book.asks)):
            count = sum(1 for lvl in levels[: self._level_count] if is_outlier(lvl, self._outliers_detection))
            if count:
                OUTLIER_LEVELS.labels(side=side).inc(count)
