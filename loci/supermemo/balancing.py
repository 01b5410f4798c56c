"""
Load balancing hook for review dates.

A balancer may move the date proposed by the scheduler to spread reviews
more evenly. The scheduler itself never calls it; the review service applies
it after computing a result.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ReviewDateBalancer(Protocol):
    def balance_review_date(self, proposed: datetime) -> datetime:
        """Return the date to use in place of the proposed one."""
        ...


class NoLoadBalancing:
    """Default balancer: keeps the proposed date."""

    def balance_review_date(self, proposed: datetime) -> datetime:
        return proposed
