"""
Types for review statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReviewStats:
    """
    Aggregate review performance over a period.
    """
    total_reviews: int
    correct_reviews: int
    accuracy: float
    average_response_time_ms: int
    period_days: int


@dataclass(frozen=True)
class DailyReviewStat:
    date: date
    total_reviews: int
    correct_reviews: int
    accuracy: float
