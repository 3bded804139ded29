"""Console order book renderer: parallel bid/ask columns with outlier highlighting."""

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from zscore_monitor.models.orderbook import Level, OrderBook
from zscore_monitor.stats.zscore import is_outlier

BID_STYLE = "green"
ASK_STYLE = "red"
ZSCORE_STYLE = "white"
OUTLIER_STYLE = "black on white"


def _zscore(level: Level) -> str:
    return f"{level.zscore:10.2f}"


def _price(level: Level) -> str:
    return f"{level.price:10.2f}"


def _quantity(level: Level) -> str:
    return f"{level.quantity:10.6f}"


class ConsolePrinter:
    """Clears the terminal and redraws the book on every call."""

    def __init__(
        self,
        pair: str,
        level_count: int = 20,
        outliers_detection: float = 1.5,
        console: Console | None = None,
    ) -> None:
        self._pair = pair
        self._level_count = level_count
        self._threshold = outliers_detection
        self._console = console or Console()

    @property
    def title(self) -> str:
        return (
            f"Pair: {self._pair} | Outliers Detection: {self._threshold} "
            f"| Level Count: {self._level_count}"
        )

    def _bid_cells(self, levels: list[Level], i: int) -> list[Text]:
        if i >= len(levels):
            return [Text(""), Text(""), Text("")]
        lvl = levels[i]
        if is_outlier(lvl, self._threshold):
            return [Text(_zscore(lvl), style=OUTLIER_STYLE),
                    Text(_price(lvl), style=OUTLIER_STYLE),
                    Text(_quantity(lvl), style=OUTLIER_STYLE)]
        return [Text(_zscore(lvl), style=ZSCORE_STYLE),
                Text(_price(lvl), style=BID_STYLE),
                Text(_quantity(lvl), style=BID_STYLE)]

    def _ask_cells(self, levels: list[Level], i: int) -> list[Text]:
        if i >= len(levels):
            return [Text(""), Text(""), Text("")]
        lvl = levels[i]
        if is_outlier(lvl, self._threshold):
            return [Text(_price(lvl), style=OUTLIER_STYLE),
                    Text(_quantity(lvl), style=OUTLIER_STYLE),
                    Text(_zscore(lvl), style=OUTLIER_STYLE)]
        return [Text(_price(lvl), style=ASK_STYLE),
                Text(_quantity(lvl), style=ASK_STYLE),
                Text(_zscore(lvl), style=ZSCORE_STYLE)]

    def build_table(self, book: OrderBook) -> Table:
        """One row per window level; the shorter side is padded with blanks."""
        table = Table(title=self.title, box=box.ASCII, show_header=True)
        for name in ("Z-Score", "Price", "Quantity"):
            table.add_column(f"BID {name}", justify="right")
        for name in ("Price", "Quantity", "Z-Score"):
            table.add_column(f"ASK {name}", justify="right")

        for i in range(self._level_count):
            table.add_row(*self._bid_cells(book.bids, i), *self._ask_cells(book.asks, i))
        return table

    def print(self, book: OrderBook) -> None:
        self._console.clear()
        self._console.print(self.build_table(book))
