"""Entry point for the z-score monitor."""

import asyncio
import logging
import signal
import sys

from zscore_monitor.config.settings import Settings
from zscore_monitor.engine import ScoreEngine
from zscore_monitor.errors import SubscriptionError
from zscore_monitor.metrics.prometheus import start_metrics_server
from zscore_monitor.printer.console_printer import ConsolePrinter
from zscore_monitor.streaming.multiplexer import Multiplexer, Streamer
from zscore_monitor.streaming.replay_streamer import ReplayStreamer
from zscore_monitor.streaming.websocket_streamer import WebSocketStreamer

logger = logging.getLogger("zscore_monitor")


def build_streamers(settings: Settings) -> list[Streamer]:
    """One replay streamer if a replay file is set, else one streamer per WebSocket URI."""
    if settings.replay_file:
        return [
            ReplayStreamer(
                "replay-0",
                settings.replay_file,
                interval=settings.replay_interval,
                loop=settings.replay_loop,
            )
        ]
    return [
        WebSocketStreamer(
            f"ws-{i}",
            uri,
            reconnect_delay=settings.ws_reconnect_delay,
            reconnect_max_delay=settings.ws_reconnect_max_delay,
        )
        for i, uri in enumerate(settings.ws_uris)
    ]


def _log_streamers_exit(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.error("Tick streamers stopped: %s", task.exception())


async def run(settings: Settings, stop: asyncio.Event) -> None:
    mpx = Multiplexer(queue_size=settings.subscription_queue_size)
    for streamer in build_streamers(settings):
        mpx.attach(streamer)

    if mpx.source_count != settings.expected_source_count:
        logger.warning(
            "%d sources attached but %d expected; batches will never be complete",
            mpx.source_count,
            settings.expected_source_count,
        )

    subscription = mpx.subscribe(settings.subscription_name)

    printer = ConsolePrinter(
        settings.pair,
        level_count=settings.level_count,
        outliers_detection=settings.outliers_detection,
    )
    engine = ScoreEngine(
        printer,
        level_count=settings.level_count,
        sort_levels=settings.sort_levels,
        strict_level_count=settings.strict_level_count,
        outliers_detection=settings.outliers_detection,
    )

    streamers_task = asyncio.create_task(mpx.run())
    streamers_task.add_done_callback(_log_streamers_exit)
    try:
        await engine.run(subscription, settings.expected_source_count, stop)
    finally:
        mpx.request_shutdown()
        streamers_task.cancel()
        await asyncio.gather(streamers_task, return_exceptions=True)


def main() -> None:
    settings = Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        stream=sys.stdout,
    )
    logger.info("Starting z-score monitor for %s", settings.pair)

    if settings.metrics_port > 0:
        start_metrics_server(settings.metrics_port)
        logger.info("Prometheus metrics on port %d", settings.metrics_port)

    loop = asyncio.new_event_loop()
    stop = asyncio.Event()

    def _shutdown(sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down...", sig.name)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _shutdown, sig)

    try:
        loop.run_until_complete(run(settings, stop))
    except SubscriptionError as exc:
        logger.critical("Subscription failed: %s", exc)
        sys.exit(1)
    finally:
        loop.close()
        logger.info("Z-score monitor stopped")


if __name__ == "__main__":
    main()
