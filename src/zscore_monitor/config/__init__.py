from zscore_monitor.config.settings import Settings

__all__ = ["Settings"]
