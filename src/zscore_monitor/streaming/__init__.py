from zscore_monitor.streaming.multiplexer import Multiplexer, Streamer, Subscription
from zscore_monitor.streaming.replay_streamer import ReplayStreamer
from zscore_monitor.streaming.websocket_streamer import WebSocketStreamer

__all__ = [
    "Multiplexer",
    "ReplayStreamer",
    "Streamer",
    "Subscription",
    "WebSocketStreamer",
]
