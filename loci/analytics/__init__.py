"""
Analytics package exports.
"""

from loci.analytics.metrics import (
    accuracy_counts,
    compute_daily_review_stats,
    compute_review_stats,
    events_to_frame,
)
from loci.analytics.types import DailyReviewStat, ReviewStats

__all__ = [
    "accuracy_counts",
    "compute_daily_review_stats",
    "compute_review_stats",
    "events_to_frame",
    "DailyReviewStat",
    "ReviewStats",
]
