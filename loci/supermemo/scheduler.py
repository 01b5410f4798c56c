"""
Scheduler - SuperMemo Algorithm Logic

Pure enhanced SuperMemo-2 scheduling (no database calls).

Main workflow:
1. Load item state (caller's responsibility)
2. Compute the next state from the quality rating
3. Return the new state (+ review event for apply_review)
4. Persist both (caller's responsibility)

Callers must serialize reviews of the same item: two concurrent
computations on one item would both read and then write the same record.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Protocol, Tuple

from loci.supermemo import interval_updates
from loci.supermemo.config import DEFAULT_CONFIGURATION, SchedulerConfiguration
from loci.supermemo.constants import FAILED_INTERVAL_DAYS, Quality
from loci.supermemo.memory_state import (
    ReviewableItem,
    ReviewEvent,
    SchedulingResult,
    utc_now,
)


logger = logging.getLogger(__name__)


class HasReviewState(Protocol):
    ease_factor: float
    interval_days: int
    repetition_count: int


def compute(
    current: HasReviewState,
    quality: Quality | int,
    total_reviews: int = 0,
    correct_reviews: int = 0,
    config: SchedulerConfiguration = DEFAULT_CONFIGURATION,
    now: Optional[datetime] = None
) -> SchedulingResult:
    """
    Compute the next review state from the current state and a rating.

    Successful recall (quality >= 3):
        - ease factor updated and floored at config.min_ease_factor
        - repetition count + 1
        - interval 1, then 6, then round(interval * ease)
        - accuracy bias from the 3rd repetition when history is given
        - interval capped at config.max_interval_days
    Failed recall:
        - interval 1, repetition count 0, ease factor unchanged

    Omit total_reviews (or pass 0) for plain SM-2 behavior.

    Args:
        current: Object with ease_factor, interval_days, repetition_count
        quality: Recall quality (Quality or int 0-5)
        total_reviews: Number of past reviews of this item
        correct_reviews: Number of past successful reviews of this item
        config: Scheduler configuration
        now: Time of the review (defaults to now)

    Returns:
        SchedulingResult with the new state and next review date

    Raises:
        ValueError: on an invalid rating or negative counts
    """
    quality = Quality.coerce(quality)
    _check_preconditions(current, total_reviews, correct_reviews)

    if now is None:
        now = utc_now()

    ease_factor = current.ease_factor

    if quality.is_successful:
        ease_factor = interval_updates.update_ease_factor(
            ease_factor, quality, config.min_ease_factor
        )
        repetition_count = current.repetition_count + 1
        interval_days = interval_updates.base_interval(
            repetition_count, current.interval_days, ease_factor
        )

        if config.use_accuracy_bias and repetition_count >= 3 and total_reviews > 0:
            multiplier = interval_updates.accuracy_multiplier(
                total_reviews, correct_reviews, config.accuracy_bias_range
            )
            interval_days = interval_updates.apply_accuracy_bias(interval_days, multiplier)

        interval_days = interval_updates.cap_interval(interval_days, config.max_interval_days)
    else:
        interval_days = FAILED_INTERVAL_DAYS
        repetition_count = 0

    next_review_date = interval_updates.project_next_review(now, interval_days)

    logger.debug(
        "quality=%d ease %.3f->%.3f interval %d->%d repetition %d->%d",
        quality, current.ease_factor, ease_factor,
        current.interval_days, interval_days,
        current.repetition_count, repetition_count,
    )

    return SchedulingResult(
        ease_factor=ease_factor,
        interval_days=interval_days,
        repetition_count=repetition_count,
        next_review_date=next_review_date,
    )


def apply_review(
    item: ReviewableItem,
    quality: Quality | int,
    total_reviews: int = 0,
    correct_reviews: int = 0,
    config: SchedulerConfiguration = DEFAULT_CONFIGURATION,
    now: Optional[datetime] = None,
    is_reverse: bool = False,
    response_time_ms: Optional[int] = None
) -> Tuple[ReviewableItem, ReviewEvent]:
    """
    Review an item and return its updated copy + the review event.

    The input item is not modified. Caller is responsible for:
    1. Saving the updated item
    2. Persisting the event

    Returns:
        Tuple of (updated_item, review_event)
    """
    if now is None:
        now = utc_now()

    quality = Quality.coerce(quality)
    result = compute(
        item,
        quality,
        total_reviews=total_reviews,
        correct_reviews=correct_reviews,
        config=config,
        now=now,
    )

    updated = replace(
        item,
        ease_factor=result.ease_factor,
        interval_days=result.interval_days,
        repetition_count=result.repetition_count,
        next_review=result.next_review_date,
    )
    event = ReviewEvent(
        item_id=item.item_id,
        quality=quality,
        timestamp=now,
        is_reverse=is_reverse,
        response_time_ms=response_time_ms,
    )
    return updated, event


def _check_preconditions(
    current: HasReviewState,
    total_reviews: int,
    correct_reviews: int
) -> None:
    if current.interval_days < 0:
        raise ValueError(f"interval_days must be >= 0, got {current.interval_days}")
    if current.repetition_count < 0:
        raise ValueError(f"repetition_count must be >= 0, got {current.repetition_count}")
    if correct_reviews < 0:
        raise ValueError(f"correct_reviews must be >= 0, got {correct_reviews}")
    if total_reviews < correct_reviews:
        raise ValueError(
            f"total_reviews ({total_reviews}) must be >= correct_reviews ({correct_reviews})"
        )
