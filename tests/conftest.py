"""Shared test fixtures for zscore-monitor tests."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure src is on the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from zscore_monitor.models.orderbook import Level, OrderBook  # noqa: E402
from zscore_monitor.models.tick import RawTick  # noqa: E402


def make_levels(pairs: list[tuple[float, float]]) -> list[Level]:
    return [Level(price=p, quantity=q) for p, q in pairs]


def make_book(bids: list[tuple[float, float]], asks: list[tuple[float, float]]) -> OrderBook:
    return OrderBook(bids=make_levels(bids), asks=make_levels(asks))


def make_tick(
    bids: list[tuple[float, float]],
    asks: list[tuple[float, float]],
    source: str = "ws-0",
) -> RawTick:
    return RawTick.model_validate({
        "source": source,
        "symbol": "ETH_TL",
        "bids": [list(b) for b in bids],
        "asks": [list(a) for a in asks],
    })


# ─── Sample data ──────────────────────────────────────────────────────────────

SAMPLE_BIDS = [(100.0, 5.0), (99.0, 3.0), (98.0, 7.0), (97.0, 1.0), (96.0, 4.0)]
SAMPLE_ASKS = [(101.0, 2.0), (102.0, 6.0), (103.0, 4.0), (104.0, 8.0), (105.0, 5.0)]


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def printer() -> MagicMock:
    return MagicMock()


@pytest.fixture
def sample_tick() -> RawTick:
    return make_tick(SAMPLE_BIDS, SAMPLE_ASKS)
