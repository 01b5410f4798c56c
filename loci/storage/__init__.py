"""
Persistence for itineraries, locations and review history.
"""

from loci.storage.database import get_engine, init_db, make_session_factory, reset_db
from loci.storage.repository import ItinerarySummary, LocationData, LocationRepository

__all__ = [
    "get_engine",
    "init_db",
    "make_session_factory",
    "reset_db",
    "ItinerarySummary",
    "LocationData",
    "LocationRepository",
]
