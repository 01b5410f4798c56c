"""
Due-set selection.

Builds the work queue for a review session from a snapshot of items
(no DB calls). Two modes:
- due only: items due today or earlier, most overdue first
- force_all: every item in scope, in sequence order (replay the itinerary)
"""

from __future__ import annotations

from datetime import datetime
from typing import Hashable, Iterable, Optional, Protocol, TypeVar

from loci.supermemo.memory_state import utc_now, whole_days_between


class SchedulableItem(Protocol):
    sequence: int
    scope_id: Optional[Hashable]
    next_review: datetime


T = TypeVar("T", bound=SchedulableItem)


class ItemSource(Protocol[T]):
    """Read accessor for items, optionally pre-filtered by scope."""

    def list_items(self, scope_id: Optional[Hashable] = None) -> Iterable[T]:
        ...


# (label, upper bound in whole days); None means unbounded
SCHEDULE_BUCKETS: list[tuple[str, Optional[int]]] = [
    ("Overdue", -1),
    ("Today", 0),
    ("Tomorrow", 1),
    ("This Week", 7),
    ("Next Week", 14),
    ("This Month", 30),
    ("Later", None),
]


def is_due(item: SchedulableItem, now: datetime) -> bool:
    """An item is due when its next review is on or before today."""
    return whole_days_between(now, item.next_review) <= 0


def due_items(
    items: Iterable[T],
    now: Optional[datetime] = None,
    scope: Optional[Hashable] = None,
    force_all: bool = False
) -> list[T]:
    """
    Select and order the items to review.

    Args:
        items: Snapshot of items (any order)
        now: Reference time (defaults to now)
        scope: Restrict to items with this scope_id
        force_all: Return every scoped item sorted by sequence, due or not

    Returns:
        New list; ties keep their input order
    """
    if now is None:
        now = utc_now()

    scoped = [item for item in items if scope is None or item.scope_id == scope]

    if force_all:
        return sorted(scoped, key=lambda item: item.sequence)

    due = [item for item in scoped if is_due(item, now)]
    due.sort(key=lambda item: item.next_review)
    return due


def select_due(
    source: ItemSource[T],
    now: Optional[datetime] = None,
    scope: Optional[Hashable] = None,
    force_all: bool = False
) -> list[T]:
    """Read items from source and select the due set."""
    return due_items(source.list_items(scope), now=now, scope=scope, force_all=force_all)


def schedule_buckets(
    items: Iterable[T],
    now: Optional[datetime] = None
) -> list[tuple[str, list[T]]]:
    """
    Group items by how soon they are due.

    Items are sorted by next review; empty buckets are omitted.

    Returns:
        List of (label, items) in bucket order
    """
    if now is None:
        now = utc_now()

    grouped: dict[str, list[T]] = {label: [] for label, _ in SCHEDULE_BUCKETS}
    for item in sorted(items, key=lambda item: item.next_review):
        days = whole_days_between(now, item.next_review)
        grouped[_bucket_label(days)].append(item)

    return [(label, grouped[label]) for label, _ in SCHEDULE_BUCKETS if grouped[label]]


def _bucket_label(days: int) -> str:
    for label, upper in SCHEDULE_BUCKETS:
        if upper is None or days <= upper:
            return label
    return SCHEDULE_BUCKETS[-1][0]
