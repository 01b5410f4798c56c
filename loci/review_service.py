"""
Review service - ties the SuperMemo core to a location store.

Main workflow:
1. Caller asks for the due queue of an itinerary (or all itineraries)
2. User rates each location
3. Service computes the new state, balances the date, persists both
   the state and the review event

The store is passed in; nothing here is process-wide. Callers must not
review the same location concurrently.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Hashable, Optional, Protocol

from loci.supermemo import scheduler
from loci.supermemo.balancing import NoLoadBalancing, ReviewDateBalancer
from loci.supermemo.config import DEFAULT_CONFIGURATION, SchedulerConfiguration
from loci.supermemo.constants import Quality
from loci.supermemo.due_selection import select_due
from loci.supermemo.memory_state import ReviewableItem, ReviewEvent, utc_now


logger = logging.getLogger(__name__)


class LocationNotFoundError(LookupError):
    """Raised when a review targets a location that does not exist."""


class LocationStore(Protocol):
    def list_items(self, scope_id: Optional[Hashable] = None) -> list[ReviewableItem]:
        ...

    def get_item(self, location_id: Hashable) -> Optional[ReviewableItem]:
        ...

    def review_counts(self, location_id: Hashable) -> tuple[int, int]:
        ...

    def save_review(self, item: ReviewableItem, event: ReviewEvent) -> None:
        ...


class ReviewService:
    """Due queues and review recording on top of a LocationStore."""

    def __init__(
        self,
        store: LocationStore,
        config: Optional[SchedulerConfiguration] = None,
        balancer: Optional[ReviewDateBalancer] = None
    ):
        self.store = store
        self.config = config or DEFAULT_CONFIGURATION
        self.balancer = balancer or NoLoadBalancing()

    def get_due_locations(
        self,
        itinerary_id: Optional[Hashable] = None,
        force_all: bool = False,
        now: Optional[datetime] = None
    ) -> list[ReviewableItem]:
        """
        Work queue for a session.

        Args:
            itinerary_id: Restrict to one itinerary
            force_all: Every location in sequence order, due or not
            now: Reference time (defaults to now)

        Returns:
            Locations in review order
        """
        return select_due(self.store, now=now, scope=itinerary_id, force_all=force_all)

    def review_location(
        self,
        location_id: Hashable,
        quality: Quality | int,
        is_reverse: bool = False,
        response_time_ms: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> ReviewableItem:
        """
        Record a review and reschedule the location.

        Review history is only read when the configuration uses the
        accuracy bias.

        Returns:
            The location with its new scheduling state

        Raises:
            LocationNotFoundError: if the location does not exist
            ValueError: on an invalid quality rating
        """
        if now is None:
            now = utc_now()

        item = self.store.get_item(location_id)
        if item is None:
            raise LocationNotFoundError(f"Location {location_id} not found")

        total_reviews, correct_reviews = 0, 0
        if self.config.use_accuracy_bias:
            total_reviews, correct_reviews = self.store.review_counts(location_id)

        updated, event = scheduler.apply_review(
            item,
            quality,
            total_reviews=total_reviews,
            correct_reviews=correct_reviews,
            config=self.config,
            now=now,
            is_reverse=is_reverse,
            response_time_ms=response_time_ms,
        )

        balanced = self.balancer.balance_review_date(updated.next_review)
        if balanced != updated.next_review:
            logger.debug(
                "Balancer moved location %s from %s to %s",
                location_id, updated.next_review, balanced,
            )
            updated.next_review = balanced

        self.store.save_review(updated, event)

        logger.info(
            "Reviewed location %s quality=%d interval=%dd next=%s",
            location_id, event.quality, updated.interval_days,
            updated.next_review.isoformat(),
        )
        return updated
