"""
donorbrief.metrics._recency
===========================
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from typing import Mapping, Optional

from donorbrief.metrics.scoring import safe_ratio

# (label, min_days, max_days); max_days=None is open-ended
RECENCY_BANDS = (
    ("0-30 days", 0, 30),
    ("31-90 days", 31, 90),
    ("91-180 days", 91, 180),
    ("181-365 days", 181, 365),
    ("366+ days", 366, None),
)


@dataclass(frozen=True)
class RecencyBucket:
    label: str
    min_days: int
    max_days: Optional[int]
    donor_count: int
    total_amount: float
    donor_share: float
    amount_share: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def _band_index(days: int) -> int:
    for index, (_, _, max_days) in enumerate(RECENCY_BANDS):
        if max_days is None or days <= max_days:
            return index
    return len(RECENCY_BANDS) - 1


def recency_buckets(profiles: Mapping, as_of: datetime.date) -> tuple:
    """
    Bucket donors by days since their last gift.

    A last gift dated after ``as_of`` counts as zero days old, so every donor
    lands in exactly one band.  Shares are ``0.0`` when there are no donors
    or no giving.
    """
    counts = [0] * len(RECENCY_BANDS)
    totals = [0.0] * len(RECENCY_BANDS)
    for profile in profiles.values():
        days = max(0, (as_of - profile.last_gift_date).days)
        index = _band_index(days)
        counts[index] += 1
        totals[index] += profile.total_amount

    donor_total = sum(counts)
    amount_total = sum(totals)
    return tuple(
        RecencyBucket(
            label=label,
            min_days=min_days,
            max_days=max_days,
            donor_count=count,
            total_amount=total,
            donor_share=safe_ratio(count, donor_total),
            amount_share=safe_ratio(total, amount_total),
        )
        for (label, min_days, max_days), count, total in zip(RECENCY_BANDS, counts, totals)
    )
