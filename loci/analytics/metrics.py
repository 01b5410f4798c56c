"""
Metric computations for review statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Hashable, Iterable, Optional

import pandas as pd

from loci.analytics.types import DailyReviewStat, ReviewStats
from loci.supermemo.memory_state import ReviewEvent, utc_now


EVENT_COLUMNS = [
    "item_id", "quality", "correct", "timestamp",
    "is_reverse", "response_time_ms", "day_utc",
]


def events_to_frame(events: Iterable[ReviewEvent]) -> pd.DataFrame:
    """
    Load review events into a dataframe sorted by timestamp.
    """
    rows = [
        {
            "item_id": e.item_id,
            "quality": int(e.quality),
            "correct": e.is_correct,
            "timestamp": e.timestamp,
            "is_reverse": e.is_reverse,
            "response_time_ms": e.response_time_ms,
        }
        for e in events
    ]
    if not rows:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    df = pd.DataFrame(rows)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    df["response_time_ms"] = pd.to_numeric(df["response_time_ms"], errors="coerce")
    df["day_utc"] = df["timestamp"].dt.floor("D").dt.as_unit("ns")
    return df.sort_values("timestamp").reset_index(drop=True)


def _utc_timestamp(now: datetime) -> pd.Timestamp:
    ts = pd.Timestamp(now)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def build_day_index(now: datetime, period_days: int) -> pd.DatetimeIndex:
    """
    Dense UTC day index of the last period_days days, ending today.
    """
    if period_days <= 0:
        raise ValueError(f"period_days must be > 0, got {period_days}")
    today = _utc_timestamp(now).floor("D")
    return pd.date_range(end=today, periods=period_days, freq="D").as_unit("ns")


def events_in_period(df: pd.DataFrame, now: datetime, period_days: int) -> pd.DataFrame:
    """
    Events from the first day of the period up to now.
    """
    day_index = build_day_index(now, period_days)
    if df.empty:
        return df
    mask = (df["day_utc"] >= day_index[0]) & (df["timestamp"] <= _utc_timestamp(now))
    return df[mask]


def compute_review_stats(
    events: Iterable[ReviewEvent],
    now: Optional[datetime] = None,
    period_days: int = 30
) -> ReviewStats:
    """
    Totals, accuracy and mean response time over the period.
    """
    if now is None:
        now = utc_now()

    scoped = events_in_period(events_to_frame(events), now, period_days)
    total = int(len(scoped))
    if total == 0:
        return ReviewStats(0, 0, 0.0, 0, period_days)

    correct = int(scoped["correct"].sum())
    times = scoped["response_time_ms"].dropna()
    average_ms = int(round(float(times.mean()))) if not times.empty else 0

    return ReviewStats(
        total_reviews=total,
        correct_reviews=correct,
        accuracy=correct / total,
        average_response_time_ms=average_ms,
        period_days=period_days,
    )


def compute_daily_review_stats(
    events: Iterable[ReviewEvent],
    now: Optional[datetime] = None,
    period_days: int = 30
) -> list[DailyReviewStat]:
    """
    One entry per day of the period (oldest first), zero-filled.
    """
    if now is None:
        now = utc_now()

    day_index = build_day_index(now, period_days)
    scoped = events_in_period(events_to_frame(events), now, period_days)

    if scoped.empty:
        return [DailyReviewStat(day.date(), 0, 0, 0.0) for day in day_index]

    daily = scoped.groupby("day_utc").agg(
        total=("correct", "size"),
        correct=("correct", "sum"),
    )
    daily = daily.reindex(day_index, fill_value=0)

    stats = []
    for day, row in daily.iterrows():
        total = int(row["total"])
        correct = int(row["correct"])
        stats.append(DailyReviewStat(
            date=day.date(),
            total_reviews=total,
            correct_reviews=correct,
            accuracy=correct / total if total else 0.0,
        ))
    return stats


def accuracy_counts(events: Iterable[ReviewEvent], item_id: Hashable) -> tuple[int, int]:
    """
    (total_reviews, correct_reviews) for one item.

    Same counts as LocationRepository.review_counts, computed from events
    already in memory.
    """
    df = events_to_frame(events)
    if df.empty:
        return 0, 0
    scoped = df[df["item_id"] == item_id]
    return int(len(scoped)), int(scoped["correct"].sum())
