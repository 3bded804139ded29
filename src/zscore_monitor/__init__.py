"""Real-time order book size z-score monitor."""

__version__ = "0.1.0"
