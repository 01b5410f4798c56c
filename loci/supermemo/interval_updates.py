"""
Interval and Ease Factor Updates

Implements the individual formulas of the enhanced SuperMemo-2 update.

Key principles:
- The first two successful repetitions use fixed intervals (1 and 6 days)
- Later intervals grow by the ease factor, rounded to the nearest day
- Accuracy bias only ever shrinks an interval, truncating the result
- Failures reset progress but leave the ease factor alone
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from loci.supermemo.constants import (
    FIRST_INTERVAL_DAYS,
    SECOND_INTERVAL_DAYS,
    Quality,
)


def update_ease_factor(
    ease_factor: float,
    quality: Quality,
    min_ease_factor: float
) -> float:
    """
    Update ease factor after a successful recall.

    Formula:
        EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
        EF' = max(min_ease_factor, EF')

    q=5 adds 0.10, q=4 adds 0.00, q=3 subtracts 0.14.

    Args:
        ease_factor: Current ease factor
        quality: Recall quality (expected to be successful)
        min_ease_factor: Lower bound

    Returns:
        New ease factor
    """
    distance = 5 - int(quality)
    new_ease = ease_factor + (0.1 - distance * (0.08 + distance * 0.02))
    return max(min_ease_factor, new_ease)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    floor = math.floor(abs(value))
    rounded = floor + 1 if abs(value) - floor >= 0.5 else floor
    return int(math.copysign(rounded, value))


def base_interval(
    new_repetition: int,
    current_interval: int,
    new_ease_factor: float
) -> int:
    """
    Interval before bias and cap, for a successful recall.

    Args:
        new_repetition: Repetition count after this review
        current_interval: Interval before this review (days)
        new_ease_factor: Ease factor after this review

    Returns:
        Interval in days
    """
    if new_repetition == 1:
        return FIRST_INTERVAL_DAYS
    if new_repetition == 2:
        return SECOND_INTERVAL_DAYS
    return round_half_up(current_interval * new_ease_factor)


def accuracy_multiplier(
    total_reviews: int,
    correct_reviews: int,
    bias_range: tuple[float, float]
) -> float:
    """
    Interval multiplier derived from historical accuracy.

    Formula:
        m = clamp(low + accuracy * (high - low), low, high)

    100% accuracy gets the upper bound (no penalty with the default range),
    0% accuracy gets the lower bound.

    Args:
        total_reviews: Number of past reviews (must be > 0)
        correct_reviews: Number of past successful reviews
        bias_range: (low, high) multiplier bounds

    Returns:
        Multiplier within bias_range
    """
    low, high = bias_range
    accuracy = correct_reviews / total_reviews
    return max(low, min(high, low + accuracy * (high - low)))


def apply_accuracy_bias(interval_days: int, multiplier: float) -> int:
    # Truncating cast, unlike base_interval's rounding.
    return int(interval_days * multiplier)


def cap_interval(interval_days: int, max_interval_days: int) -> int:
    return min(interval_days, max_interval_days)


def project_next_review(now: datetime, interval_days: int) -> datetime:
    """
    Add interval_days calendar days to now.

    Falls back to now when the date cannot be represented.
    """
    try:
        return now + timedelta(days=interval_days)
    except OverflowError:
        return now
