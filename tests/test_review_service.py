"""
Tests for the review service, against SQLite and against an in-memory store.
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from loci.review_service import LocationNotFoundError, ReviewService
from loci.storage import LocationData
from loci.supermemo import Quality, SchedulerConfiguration


DAY = timedelta(days=1)


class MemoryStore:
    """Dict-backed store that records what the service asks for."""

    def __init__(self, items, counts=(0, 0)):
        self.items = {item.item_id: item for item in items}
        self.counts = counts
        self.count_requests = 0
        self.saved = []

    def list_items(self, scope_id=None):
        return [i for i in self.items.values() if scope_id is None or i.scope_id == scope_id]

    def get_item(self, location_id):
        item = self.items.get(location_id)
        return replace(item) if item is not None else None

    def review_counts(self, location_id):
        self.count_requests += 1
        return self.counts

    def save_review(self, item, event):
        self.items[item.item_id] = item
        self.saved.append(event)


class ShiftByOneDay:
    def balance_review_date(self, proposed):
        return proposed + DAY


@pytest.fixture
def palace(repo, now):
    return repo.add_itinerary("Home", [
        LocationData(sequence=0, name="Front door"),
        LocationData(sequence=1, name="Hallway"),
        LocationData(sequence=2, name="Kitchen"),
    ], now=now)


def test_new_itinerary_is_due(repo, palace, now):
    service = ReviewService(repo)

    due = service.get_due_locations(palace.id, now=now)

    assert [item.sequence for item in due] == [0, 1, 2]


def test_review_reschedules_and_persists(repo, palace, now):
    service = ReviewService(repo)
    first_id = palace.location_ids[0]

    updated = service.review_location(first_id, Quality.PERFECT, now=now)

    assert updated.repetition_count == 1
    assert updated.interval_days == 1
    assert updated.next_review == now + DAY
    assert repo.get_item(first_id) == updated
    assert [e.quality for e in repo.list_events(first_id)] == [Quality.PERFECT]


def test_reviewed_location_leaves_due_queue(repo, palace, now):
    service = ReviewService(repo)
    service.review_location(palace.location_ids[0], Quality.PERFECT, now=now)

    due = service.get_due_locations(palace.id, now=now)

    assert [item.sequence for item in due] == [1, 2]
    assert len(service.get_due_locations(palace.id, now=now + DAY)) == 3


def test_force_all_includes_reviewed_locations(repo, palace, now):
    service = ReviewService(repo)
    service.review_location(palace.location_ids[2], Quality.PERFECT, now=now)

    drill = service.get_due_locations(palace.id, force_all=True, now=now)

    assert [item.sequence for item in drill] == [0, 1, 2]


def test_due_queue_across_itineraries(repo, palace, now):
    service = ReviewService(repo)
    repo.add_itinerary("Office", [LocationData(sequence=0, name="Desk")], now=now - DAY)

    due = service.get_due_locations(now=now)

    assert len(due) == 4
    assert due[0].sequence == 0 and due[0].scope_id != palace.id


def test_review_history_feeds_accuracy_bias(repo, palace, now):
    service = ReviewService(repo)
    location_id = palace.location_ids[0]
    moment = now
    for quality in [Quality.PERFECT, Quality.BLACKOUT, Quality.PERFECT,
                    Quality.PERFECT, Quality.PERFECT]:
        updated = service.review_location(location_id, quality, now=moment)
        moment = updated.next_review

    # Last review: 4 past reviews, 3 correct -> multiplier 0.875;
    # round(6 * 2.9) = 17 -> int(17 * 0.875) = 14
    assert updated.repetition_count == 3
    assert updated.interval_days == 14
    assert repo.review_counts(location_id) == (5, 4)


def test_reverse_review_recorded(repo, palace, now):
    service = ReviewService(repo)

    service.review_location(palace.location_ids[1], 4, is_reverse=True,
                            response_time_ms=2500, now=now)

    event = repo.list_events(palace.location_ids[1])[0]
    assert event.is_reverse is True
    assert event.response_time_ms == 2500
    assert event.quality is Quality.HESITANT


def test_unknown_location(repo, now):
    service = ReviewService(repo)

    with pytest.raises(LocationNotFoundError):
        service.review_location(12345, Quality.PERFECT, now=now)


def test_invalid_quality_leaves_state_untouched(make_item, now):
    item = make_item("loc", interval_days=6, repetition_count=2)
    store = MemoryStore([item])
    service = ReviewService(store)

    with pytest.raises(ValueError):
        service.review_location("loc", 9, now=now)

    assert store.saved == []
    assert store.items["loc"] == item


def test_memory_store_bias_applied(make_item, now):
    store = MemoryStore([make_item("loc", ease_factor=2.5, interval_days=10, repetition_count=3)],
                        counts=(10, 5))
    service = ReviewService(store)

    updated = service.review_location("loc", Quality.PERFECT, now=now)

    assert updated.interval_days == 19
    assert store.count_requests == 1


def test_basic_configuration_skips_history(make_item, now):
    store = MemoryStore([make_item("loc", ease_factor=2.5, interval_days=10, repetition_count=3)],
                        counts=(10, 5))
    service = ReviewService(store, config=SchedulerConfiguration.basic())

    updated = service.review_location("loc", Quality.PERFECT, now=now)

    assert updated.interval_days == 26
    assert store.count_requests == 0


def test_balancer_moves_next_review(make_item, now):
    store = MemoryStore([make_item("loc")])
    service = ReviewService(store, balancer=ShiftByOneDay())

    updated = service.review_location("loc", Quality.PERFECT, now=now)

    assert updated.interval_days == 1
    assert updated.next_review == now + 2 * DAY
    assert store.items["loc"].next_review == now + 2 * DAY
