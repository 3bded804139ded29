"""Prometheus metrics for the z-score monitor."""

from prometheus_client import Counter, Histogram, start_http_server

# Batches delivered by the subscription
BATCHES_RECEIVED = Counter(
    "zscore_monitor_batches_received_total",
    "Total tick batches received from the subscription",
)

# Batches rejected by the source-count barrier
BATCHES_DROPPED = Counter(
    "zscore_monitor_batches_dropped_total",
    "Total batches dropped because not every source had reported",
)

# Ticks scored and handed to the printer
TICKS_SCORED = Counter(
    "zscore_monitor_ticks_scored_total",
    "Total ticks scored and rendered",
)

# Per-tick scoring errors
TICK_ERRORS = Counter(
    "zscore_monitor_tick_errors_total",
    "Total ticks skipped due to scoring errors",
    ["kind"],
)

# Levels flagged as outliers
OUTLIER_LEVELS = Counter(
    "zscore_monitor_outlier_levels_total",
    "Total levels whose z-score exceeded the detection threshold",
    ["side"],
)

# Messages rejected by the tick validator
INVALID_MESSAGES = Counter(
    "zscore_monitor_invalid_messages_total",
    "Total tick messages that failed parsing or validation",
    ["source"],
)

# WebSocket reconnections
WS_RECONNECTS = Counter(
    "zscore_monitor_ws_reconnects_total",
    "Total WebSocket reconnections",
    ["source"],
)

# Batches discarded because a subscriber queue was full
SUBSCRIPTION_OVERFLOWS = Counter(
    "zscore_monitor_subscription_overflows_total",
    "Total batches discarded on a full subscription queue",
    ["subscription"],
)

# Per-tick processing latency (convert → score → print)
TICK_LATENCY = Histogram(
    "zscore_monitor_tick_latency_seconds",
    "Per-tick processing latency in seconds",
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1),
)


def start_metrics_server(port: int) -> None:
    """Start the Prometheus metrics HTTP server."""
    start_http_server(port)
