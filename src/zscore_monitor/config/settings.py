"""Configuration via environment variables with ZSCORE_ prefix."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "ZSCORE_"}

    # Market
    pair: str = "ETH_TL"

    # Statistics
    level_count: int = Field(default=20, ge=1)
    outliers_detection: float = Field(default=1.5, gt=0)
    sort_levels: bool = True
    strict_level_count: bool = False

    # Synchronization
    expected_source_count: int = Field(default=1, ge=1)
    subscription_name: str = "z-score"
    subscription_queue_size: int = Field(default=64, ge=1)

    # WebSocket sources (one streamer per URI)
    ws_uris: list[str] = ["ws://localhost:8765"]
    ws_reconnect_delay: float = 1.0
    ws_reconnect_max_delay: float = 30.0

    # Replay source, used instead of WebSocket when set
    replay_file: str | None = None
    replay_interval: float = 0.5
    replay_loop: bool = False

    # Metrics (0 disables the exporter)
    metrics_port: int = 9091

    # Logging
    log_level: str = "INFO"
