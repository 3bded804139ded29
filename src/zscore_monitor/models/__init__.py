"""Order book models."""

from zscore_monitor.models.orderbook import Level, OrderBook, convert
from zscore_monitor.models.tick import RawLevel, RawTick

__all__ = [
    "Level",
    "OrderBook",
    "RawLevel",
    "RawTick",
    "convert",
]
