"""
Memory State - SuperMemo Item State and Review Records

Defines the plain records the scheduler consumes and produces.

Key concepts:
- Ease factor: multiplier controlling how fast the interval grows
- Interval: days until the next scheduled review
- Repetition count: consecutive successful recalls since the last failure
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Hashable, Optional

from loci.supermemo.constants import (
    DEFAULT_EASE_FACTOR,
    INITIAL_INTERVAL_DAYS,
    Quality,
)


ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ReviewState:
    """Scheduling state of one item, as read by the scheduler."""
    ease_factor: float
    interval_days: int
    repetition_count: int


@dataclass
class ReviewableItem:
    """
    One memorizable unit (a location within an itinerary).

    sequence is unique within scope_id and defines presentation order.
    """
    item_id: Hashable
    sequence: int
    scope_id: Optional[Hashable] = None

    # SuperMemo-2 parameters
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = INITIAL_INTERVAL_DAYS
    repetition_count: int = 0
    next_review: datetime = field(default_factory=utc_now)

    @property
    def state(self) -> ReviewState:
        return ReviewState(
            ease_factor=self.ease_factor,
            interval_days=self.interval_days,
            repetition_count=self.repetition_count,
        )


@dataclass(frozen=True)
class ReviewEvent:
    """
    Immutable log entry for one review.

    is_reverse distinguishes the reverse direction (recall the sequence
    position from the item) from the forward one.
    """
    item_id: Hashable
    quality: Quality
    timestamp: datetime
    is_reverse: bool = False
    response_time_ms: Optional[int] = None

    @property
    def is_correct(self) -> bool:
        return self.quality.is_successful


@dataclass(frozen=True)
class SchedulingResult:
    """Output of one scheduler computation."""
    ease_factor: float
    interval_days: int
    repetition_count: int
    next_review_date: datetime

    @property
    def state(self) -> ReviewState:
        return ReviewState(
            ease_factor=self.ease_factor,
            interval_days=self.interval_days,
            repetition_count=self.repetition_count,
        )


def initialize_new_item(
    item_id: Hashable,
    sequence: int,
    scope_id: Optional[Hashable] = None,
    now: Optional[datetime] = None
) -> ReviewableItem:
    """
    Initialize state for a new item (due immediately).

    Args:
        item_id: Stable identifier
        sequence: Position within the parent itinerary
        scope_id: Parent itinerary identifier
        now: Creation time (defaults to now)

    Returns:
        ReviewableItem with ease 2.5, interval 1, repetition 0
    """
    if now is None:
        now = utc_now()

    return ReviewableItem(
        item_id=item_id,
        sequence=sequence,
        scope_id=scope_id,
        ease_factor=DEFAULT_EASE_FACTOR,
        interval_days=INITIAL_INTERVAL_DAYS,
        repetition_count=0,
        next_review=now,
    )


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Number of whole days from start to end, truncated toward zero.

    A partial day counts as 0, so anything less than 24 hours away in
    either direction is "today".
    """
    return int((end - start) / ONE_DAY)
