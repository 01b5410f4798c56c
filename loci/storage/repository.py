"""
Location repository.

All database reads and writes for itineraries, locations and reviews.
Rows are converted to plain supermemo records on the way out, so callers
never hold live ORM objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session, sessionmaker

from loci.storage.models import Itinerary, Location, Review
from loci.supermemo.constants import SUCCESS_THRESHOLD, Quality
from loci.supermemo.memory_state import ReviewableItem, ReviewEvent, utc_now


logger = logging.getLogger(__name__)


@dataclass
class LocationData:
    """Content of a location to add to an itinerary."""
    sequence: int
    name: str
    description: str = ""
    image_data: Optional[bytes] = None


@dataclass
class ItinerarySummary:
    id: int
    name: str
    date_imported: datetime
    location_ids: list[int] = field(default_factory=list)


class LocationRepository:
    """SQLAlchemy-backed store; usable as a supermemo ItemSource."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _session(self) -> Session:
        return self._session_factory()

    # ---- Itineraries ----

    def add_itinerary(
        self,
        name: str,
        locations: Iterable[LocationData],
        now: Optional[datetime] = None
    ) -> ItinerarySummary:
        """
        Create an itinerary with its locations, all due immediately.

        Raises:
            ValueError: if two locations share a sequence number
        """
        if now is None:
            now = utc_now()

        locations = sorted(locations, key=lambda loc: loc.sequence)
        sequences = [loc.sequence for loc in locations]
        if len(sequences) != len(set(sequences)):
            raise ValueError(f"Duplicate sequence numbers in itinerary {name!r}")

        itinerary = Itinerary(name=name, date_imported=now)
        for loc in locations:
            itinerary.locations.append(Location(
                sequence=loc.sequence,
                name=loc.name,
                description=loc.description,
                image_data=loc.image_data,
                next_review=now,
            ))

        with self._session() as session, session.begin():
            session.add(itinerary)
            session.flush()
            summary = ItinerarySummary(
                id=itinerary.id,
                name=itinerary.name,
                date_imported=itinerary.date_imported,
                location_ids=[loc.id for loc in itinerary.locations],
            )

        logger.info("Added itinerary %r with %d locations", name, len(summary.location_ids))
        return summary

    def delete_itinerary(self, itinerary_id: int) -> bool:
        """Delete an itinerary, its locations and their reviews."""
        with self._session() as session, session.begin():
            itinerary = session.get(Itinerary, itinerary_id)
            if itinerary is None:
                return False
            session.delete(itinerary)

        logger.info("Deleted itinerary %d", itinerary_id)
        return True

    # ---- Locations ----

    def list_items(self, scope_id: Optional[int] = None) -> list[ReviewableItem]:
        """All locations, or those of one itinerary."""
        stmt = select(Location).order_by(Location.itinerary_id, Location.sequence)
        if scope_id is not None:
            stmt = stmt.where(Location.itinerary_id == scope_id)

        with self._session() as session:
            return [_to_item(row) for row in session.scalars(stmt)]

    def get_item(self, location_id: int) -> Optional[ReviewableItem]:
        with self._session() as session:
            row = session.get(Location, location_id)
            return _to_item(row) if row is not None else None

    # ---- Reviews ----

    def review_counts(self, location_id: int) -> tuple[int, int]:
        """
        Review history counters for the accuracy bias.

        Returns:
            (total_reviews, correct_reviews)
        """
        correct = func.sum(case((Review.quality >= SUCCESS_THRESHOLD, 1), else_=0))
        stmt = select(func.count(Review.id), correct).where(Review.location_id == location_id)

        with self._session() as session:
            total, correct_count = session.execute(stmt).one()
        return int(total or 0), int(correct_count or 0)

    def save_review(self, item: ReviewableItem, event: ReviewEvent) -> None:
        """
        Store the new scheduling state and log the review in one transaction.

        Raises:
            LookupError: if the location no longer exists
        """
        with self._session() as session, session.begin():
            row = session.get(Location, item.item_id)
            if row is None:
                raise LookupError(f"Location {item.item_id} not found")

            row.ease_factor = item.ease_factor
            row.interval_days = item.interval_days
            row.repetition_count = item.repetition_count
            row.next_review = item.next_review

            session.add(Review(
                location_id=row.id,
                quality=int(event.quality),
                review_date=event.timestamp,
                is_reverse=event.is_reverse,
                response_time_ms=event.response_time_ms,
            ))

    def list_events(self, location_id: Optional[int] = None) -> list[ReviewEvent]:
        """Review events, oldest first."""
        stmt = select(Review).order_by(Review.review_date, Review.id)
        if location_id is not None:
            stmt = stmt.where(Review.location_id == location_id)

        with self._session() as session:
            return [
                ReviewEvent(
                    item_id=row.location_id,
                    quality=Quality(row.quality),
                    timestamp=row.review_date,
                    is_reverse=row.is_reverse,
                    response_time_ms=row.response_time_ms,
                )
                for row in session.scalars(stmt)
            ]


def _to_item(row: Location) -> ReviewableItem:
    return ReviewableItem(
        item_id=row.id,
        sequence=row.sequence,
        scope_id=row.itinerary_id,
        ease_factor=row.ease_factor,
        interval_days=row.interval_days,
        repetition_count=row.repetition_count,
        next_review=row.next_review,
    )
