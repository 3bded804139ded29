"""Error taxonomy for per-tick scoring and subscription setup."""


class ScoreError(Exception):
    """Base class for per-tick errors. Contained by the engine loop, never fatal."""

    kind = "score_error"

    def __init__(self, side: str, message: str) -> None:
        super().__init__(f"{side}: {message}")
        self.side = side


class InsufficientLevels(ScoreError):
    kind = "insufficient_levels"

    def __init__(self, side: str) -> None:
        super().__init__(side, "no levels within the statistics window")


class DegenerateDistribution(ScoreError):
    kind = "degenerate_distribution"

    def __init__(self, side: str) -> None:
        super().__init__(side, "zero variance in level quantities")


class LevelCountMismatch(ScoreError):
    kind = "level_count_mismatch"

    def __init__(self, side: str, expected: int, actual: int) -> None:
        super().__init__(side, f"expected {expected} levels, got {actual}")
        self.expected = expected
        self.actual = actual


class SubscriptionError(Exception):
    """Subscription setup failed. Fatal at startup."""
