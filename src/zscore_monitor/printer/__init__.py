from zscore_monitor.printer.console_printer import ConsolePrinter
from zscore_monitor.printer.printer import Printer

__all__ = ["ConsolePrinter", "Printer"]
