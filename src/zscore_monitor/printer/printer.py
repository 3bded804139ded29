"""Rendering sink capability consumed by the score engine."""

from typing import Protocol

from zscore_monitor.models.orderbook import OrderBook


class Printer(Protocol):
    def print(self, book: OrderBook) -> None:
        """Render one scored order book. Called synchronously once per tick."""
