"""
SuperMemo - Enhanced SuperMemo-2 Spaced Repetition Engine

Pure scheduling core for the memory palace trainer.

This package implements SuperMemo-2 with:
- Minimum ease factor clamp and fixed first/second intervals
- Optional accuracy bias from an item's review history
- Maximum interval cap
- Due-set selection in review order or itinerary order

Quick start:
    from loci import supermemo

    # Compute the next state (algorithm only, no DB calls)
    result = supermemo.compute(item, supermemo.Quality.PERFECT, now=now)

    # Get the work queue
    queue = supermemo.due_items(items, now=now, scope=itinerary_id)
"""

# Core scheduler API (algorithm logic)
from loci.supermemo.scheduler import apply_review, compute

# Due selection
from loci.supermemo.due_selection import (
    ItemSource,
    due_items,
    is_due,
    schedule_buckets,
    select_due,
)

# Configuration
from loci.supermemo.config import DEFAULT_CONFIGURATION, SchedulerConfiguration

# Load balancing
from loci.supermemo.balancing import NoLoadBalancing, ReviewDateBalancer

# Constants and parameters
from loci.supermemo.constants import (
    BASIC_MAX_INTERVAL_DAYS,
    DEFAULT_EASE_FACTOR,
    ENGINE_VERSION,
    Quality,
)

# Records
from loci.supermemo.memory_state import (
    ReviewableItem,
    ReviewEvent,
    ReviewState,
    SchedulingResult,
    initialize_new_item,
    whole_days_between,
)


__all__ = [
    # Core algorithm
    "compute",
    "apply_review",

    # Due selection
    "ItemSource",
    "due_items",
    "is_due",
    "schedule_buckets",
    "select_due",

    # Configuration
    "DEFAULT_CONFIGURATION",
    "SchedulerConfiguration",

    # Load balancing
    "NoLoadBalancing",
    "ReviewDateBalancer",

    # Enums
    "Quality",

    # Records
    "ReviewableItem",
    "ReviewEvent",
    "ReviewState",
    "SchedulingResult",
    "initialize_new_item",
    "whole_days_between",

    # Parameters
    "BASIC_MAX_INTERVAL_DAYS",
    "DEFAULT_EASE_FACTOR",
    "ENGINE_VERSION",
]
