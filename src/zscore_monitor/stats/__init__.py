from zscore_monitor.stats.zscore import (
    check_level_count,
    compute_stats,
    compute_zscores,
    is_outlier,
)

__all__ = [
    "check_level_count",
    "compute_stats",
    "compute_zscores",
    "is_outlier",
]
