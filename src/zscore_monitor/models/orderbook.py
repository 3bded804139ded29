"""Canonical two-sided order book annotated with per-level size z-scores."""

from pydantic import BaseModel, Field

from zscore_monitor.models.tick import RawLevel, RawTick


class Level(BaseModel):
    """A single price level. ``zscore`` stays 0.0 until computed."""

    price: float = Field(gt=0, allow_inf_nan=False)
    quantity: float = Field(ge=0, allow_inf_nan=False)
    zscore: float = 0.0


class OrderBook(BaseModel):
    """Order book snapshot built fresh from each tick."""

    bids: list[Level]
    asks: list[Level]
    symbol: str | None = None
    source: str | None = None


def _levels(raw: list[RawLevel]) -> list[Level]:
    return [Level(price=lvl.price, quantity=lvl.quantity) for lvl in raw]


def convert(tick: RawTick, sort_levels: bool = True) -> OrderBook:
    """Build an OrderBook from a raw tick.

    With ``sort_levels`` bids are ordered best (highest) first and asks best
    (lowest) first; otherwise the source order is kept.
    """
    bids = _levels(tick.bids)
    asks = _levels(tick.asks)

    if sort_levels:
        bids.sort(key=lambda lvl: lvl.price, reverse=True)
        asks.sort(key=lambda lvl: lvl.price)

    return OrderBook(bids=bids, asks=asks, symbol=tick.symbol, source=tick.source)
