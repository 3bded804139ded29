"""WebSocket tick source. Publishes validated ticks and reconnects with exponential backoff."""

import asyncio
import logging

import websockets

from zscore_monitor.metrics.prometheus import WS_RECONNECTS
from zscore_monitor.streaming.multiplexer import Publish
from zscore_monitor.validation.tick_validator import parse_tick

logger = logging.getLogger(__name__)


class WebSocketStreamer:
    def __init__(
        self,
        name: str,
        uri: str,
        reconnect_delay: float = 1.0,
        reconnect_max_delay: float = 30.0,
    ) -> None:
        self.name = name
        self._uri = uri
        self._reconnect_delay = reconnect_delay
        self._max_delay = reconnect_max_delay
        self._shutdown = False

    def request_shutdown(self) -> None:
        self._shutdown = True

    async def run(self, publish: Publish) -> None:
        """Publish ticks until shutdown. Connection failures never end the streamer."""
        delay = self._reconnect_delay

        while not self._shutdown:
            try:
                async with websockets.connect(self._uri, ping_interval=20, ping_timeout=10) as ws:
                    logger.info("Streamer %s connected to %s", self.name, self._uri)
                    delay = self._reconnect_delay
                    await self._consume(ws, publish)
            except websockets.ConnectionClosed as exc:
                logger.warning("Streamer %s connection closed: %s", self.name, exc)
            except (OSError, asyncio.TimeoutError, websockets.WebSocketException) as exc:
                logger.error("Streamer %s failed to stream from %s: %r", self.name, self._uri, exc)

            if self._shutdown:
                return
            delay = await self._backoff(delay)

    async def _consume(self, ws, publish: Publish) -> None:
        async for message in ws:
            tick = parse_tick(message, self.name)
            if tick is not None:
                publish(tick)
            if self._shutdown:
                return

    async def _backoff(self, delay: float) -> float:
        """Sleep ``delay`` seconds and return the next, doubled and capped, delay."""
        WS_RECONNECTS.labels(source=self.name).inc()
        logger.info("Streamer %s reconnecting in %.1fs...", self.name, delay)
        await asyncio.sleep(delay)
        return min(delay * 2, self._max_delay)
