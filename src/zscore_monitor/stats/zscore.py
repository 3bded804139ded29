"""Size z-score computation over a bounded window of order book levels.

For each side independently, the first ``level_count`` levels form the window:

    mean    = sum(q) / n
    std_dev = sqrt(sum(q^2) / n - mean^2)      (population, single pass)
    zscore  = (q - mean) / std_dev

A side with no levels in the window, or with a flat quantity profile, has no
meaningful z-score and the whole book is rejected.
"""

import math
from collections.abc import Sequence

from zscore_monitor.errors import DegenerateDistribution, InsufficientLevels, LevelCountMismatch
from zscore_monitor.models.orderbook import Level, OrderBook

BIDS = "bids"
ASKS = "asks"


def compute_stats(levels: Sequence[Level], level_count: int) -> tuple[float, float]:
    """Return (mean, population std dev) of quantities in the first ``level_count`` levels."""
    n = min(level_count, len(levels))
    if n <= 0:
        return 0.0, 0.0

    total = 0.0
    total_sq = 0.0
    low = high = levels[0].quantity
    for lvl in levels[:n]:
        q = lvl.quantity
        total += q
        total_sq += q * q
        if q < low:
            low = q
        elif q > high:
            high = q

    mean = total / n
    # Identical quantities: E[X^2] - E[X]^2 can round to a tiny non-zero value.
    if low == high:
        return mean, 0.0

    variance = total_sq / n - mean * mean
    if variance <= 0.0:
        return mean, 0.0
    return mean, math.sqrt(variance)


def _side_stats(levels: Sequence[Level], level_count: int, side: str) -> tuple[int, float, float]:
    n = min(level_count, len(levels))
    if n <= 0:
        raise InsufficientLevels(side)
    mean, std_dev = compute_stats(levels, level_count)
    # Overflowing or non-finite quantities leave std_dev as inf or nan
    if not math.isfinite(std_dev) or std_dev <= 0.0:
        raise DegenerateDistribution(side)
    return n, mean, std_dev


def compute_zscores(book: OrderBook, level_count: int) -> None:
    """Populate ``zscore`` on the windowed levels of both sides, in place.

    Raises InsufficientLevels or DegenerateDistribution; on failure the book
    is left untouched.
    """
    bid_n, bid_mean, bid_std = _side_stats(book.bids, level_count, BIDS)
    ask_n, ask_mean, ask_std = _side_stats(book.asks, level_count, ASKS)

    for lvl in book.bids[:bid_n]:
        lvl.zscore = (lvl.quantity - bid_mean) / bid_std
    for lvl in book.asks[:ask_n]:
        lvl.zscore = (lvl.quantity - ask_mean) / ask_std


def check_level_count(book: OrderBook, level_count: int) -> None:
    """Strict policy: each side must carry exactly ``level_count`` levels."""
    for side, levels in ((BIDS, book.bids), (ASKS, book.asks)):
        if len(levels) != level_count:
            raise LevelCountMismatch(side, level_count, len(levels))


def is_outlier(level: Level, threshold: float) -> bool:
    return abs(level.zscore) > threshold
