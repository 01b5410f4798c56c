"""
SQLAlchemy ORM Models for Loci Persistence

Defines Itinerary, Location and Review models.
Deleting an itinerary removes its locations; deleting a location removes
its review history.
"""

from datetime import timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.types import TypeDecorator

from loci.supermemo.constants import DEFAULT_EASE_FACTOR, INITIAL_INTERVAL_DAYS
from loci.supermemo.memory_state import utc_now

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, returns timezone-aware UTC."""
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Naive datetime {value!r} cannot be stored; attach a timezone")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Itinerary(Base):
    """An ordered collection of locations (one memory palace route)."""
    __tablename__ = 'itineraries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    date_imported = Column(UTCDateTime, nullable=False, default=utc_now)

    locations = relationship(
        "Location",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="Location.sequence",
    )

    def __repr__(self):
        return f"<Itinerary(id={self.id}, name={self.name!r})>"


class Location(Base):
    """
    One memorizable location with its SuperMemo-2 state.

    sequence is unique within the itinerary.
    """
    __tablename__ = 'locations'
    __table_args__ = (
        UniqueConstraint('itinerary_id', 'sequence', name='uq_location_sequence'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    itinerary_id = Column(Integer, ForeignKey('itineraries.id', ondelete='CASCADE'), nullable=False)
    sequence = Column(Integer, nullable=False)

    # Content
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_data = Column(LargeBinary, nullable=True)

    # SuperMemo-2 state
    next_review = Column(UTCDateTime, nullable=False, default=utc_now)
    ease_factor = Column(Float, nullable=False, default=DEFAULT_EASE_FACTOR)
    interval_days = Column(Integer, nullable=False, default=INITIAL_INTERVAL_DAYS)
    repetition_count = Column(Integer, nullable=False, default=0)

    itinerary = relationship("Itinerary", back_populates="locations")
    reviews = relationship(
        "Review",
        back_populates="location",
        cascade="all, delete-orphan",
        order_by="Review.review_date",
    )

    def __repr__(self):
        return f"<Location(id={self.id}, itinerary={self.itinerary_id}, sequence={self.sequence})>"


class Review(Base):
    """
    Log entry for a single review of a location.

    is_reverse marks reverse mode (location -> sequence number).
    """
    __tablename__ = 'reviews'

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, ForeignKey('locations.id', ondelete='CASCADE'), nullable=False)

    quality = Column(Integer, nullable=False)  # 0=blackout ... 5=perfect
    review_date = Column(UTCDateTime, nullable=False, default=utc_now)
    is_reverse = Column(Boolean, nullable=False, default=False)
    response_time_ms = Column(Integer, nullable=True)

    location = relationship("Location", back_populates="reviews")

    def __repr__(self):
        return f"<Review(id={self.id}, location={self.location_id}, quality={self.quality})>"
