"""
Tests for item records, day arithmetic and the balancing hook.
"""

from datetime import timedelta

from loci.supermemo import (
    NoLoadBalancing,
    ReviewDateBalancer,
    initialize_new_item,
    whole_days_between,
)


def test_new_item_defaults(now):
    item = initialize_new_item("loc-7", sequence=7, scope_id="palace", now=now)

    assert item.ease_factor == 2.5
    assert item.interval_days == 1
    assert item.repetition_count == 0
    assert item.next_review == now
    assert item.state.repetition_count == 0


def test_whole_days_truncate_toward_zero(now):
    assert whole_days_between(now, now) == 0
    assert whole_days_between(now, now + timedelta(hours=23)) == 0
    assert whole_days_between(now, now - timedelta(hours=23)) == 0
    assert whole_days_between(now, now + timedelta(days=1)) == 1
    assert whole_days_between(now, now - timedelta(days=1, hours=5)) == -1
    assert whole_days_between(now, now + timedelta(days=6, hours=23)) == 6


def test_no_load_balancing_keeps_date(now):
    balancer = NoLoadBalancing()

    assert balancer.balance_review_date(now) == now
    assert isinstance(balancer, ReviewDateBalancer)
