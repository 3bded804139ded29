"""Replay ticks from a JSON-lines file, one tick per line."""

import asyncio
import logging
from pathlib import Path

from zscore_monitor.streaming.multiplexer import Publish
from zscore_monitor.validation.tick_validator import parse_tick

logger = logging.getLogger(__name__)


class ReplayStreamer:
    def __init__(self, name: str, path: str | Path, interval: float = 0.5, loop: bool = False) -> None:
        self.name = name
        self._path = Path(path)
        self._interval = interval
        self._loop = loop
        self._shutdown = False

    def request_shutdown(self) -> None:
        self._shutdown = True

    async def run(self, publish: Publish) -> None:
        """Publish each valid line, sleeping ``interval`` between lines."""
        while not self._shutdown:
            text = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
            lines = text.splitlines()
            if not lines:
                logger.warning("Streamer %s replay file %s is empty", self.name, self._path)
                return
            logger.info("Streamer %s replaying %d lines from %s", self.name, len(lines), self._path)

            for line in lines:
                if self._shutdown:
                    return
                if not line.strip():
                    continue
                tick = parse_tick(line, self.name)
                if tick is not None:
                    publish(tick)
                await asyncio.sleep(self._interval)

            if not self._loop:
                logger.info("Streamer %s replay finished", self.name)
                return
