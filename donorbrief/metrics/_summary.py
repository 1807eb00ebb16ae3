"""
donorbrief.metrics._summary
===========================
Headline gift statistics and the simple donor listings of the brief:
top donors, campaign breakdown, lapsed donors and gift-size bands.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from operator import attrgetter
from typing import Mapping, Optional

import numpy as np

from donorbrief.metrics._concentration import rank_donors
from donorbrief.metrics.scoring import safe_ratio

# (label, lower bound inclusive, upper bound exclusive or None)
GIFT_SIZE_BANDS = (
    ("Under $100", 0.0, 100.0),
    ("$100-$499.99", 100.0, 500.0),
    ("$500-$999.99", 500.0, 1_000.0),
    ("$1,000-$4,999.99", 1_000.0, 5_000.0),
    ("$5,000-$9,999.99", 5_000.0, 10_000.0),
    ("$10,000+", 10_000.0, None),
)


@dataclass(frozen=True)
class GiftSummary:
    total_raised: float
    total_gifts: int
    unique_donors: int
    average_gift: float
    median_gift: float
    largest_gift: float
    first_gift: Optional[datetime.date]
    latest_gift: Optional[datetime.date]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CampaignSummary:
    name: str
    total: float
    count: int
    share: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class GiftSizeBucket:
    label: str
    min_amount: float
    max_amount: Optional[float]
    gifts: int
    total_amount: float
    gift_share: float
    amount_share: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def summarize_gifts(profiles: Mapping, stats) -> GiftSummary:
    """
    Headline totals for the run.

    With no gifts every numeric field is zero and both dates are ``None``.
    """
    amounts = stats.sorted_amounts
    return GiftSummary(
        total_raised=stats.total_amount,
        total_gifts=stats.total_gift_count,
        unique_donors=len(profiles),
        average_gift=safe_ratio(stats.total_amount, stats.total_gift_count),
        median_gift=float(np.median(amounts)) if amounts else 0.0,
        largest_gift=amounts[-1] if amounts else 0.0,
        first_gift=min((p.first_gift_date for p in profiles.values()), default=None),
        latest_gift=max((p.last_gift_date for p in profiles.values()), default=None),
    )


def top_donors(profiles: Mapping, top_n: int = 5) -> tuple:
    return rank_donors(profiles)[:top_n]


def campaign_breakdown(stats) -> tuple:
    """Campaigns by total raised, largest first; ties keep first-seen order."""
    campaigns = [
        CampaignSummary(
            name=name,
            total=totals.total,
            count=totals.count,
            share=safe_ratio(totals.total, stats.total_amount),
        )
        for name, totals in stats.campaign_totals.items()
    ]
    return tuple(sorted(campaigns, key=attrgetter("total"), reverse=True))


def lapsed_donors(profiles: Mapping, as_of: datetime.date, lapsed_days: int = 365) -> tuple:
    """Donors with no gift since ``as_of - lapsed_days``, longest lapsed first."""
    lapsed = [p for p in profiles.values() if p.is_lapsed(as_of, lapsed_days)]
    return tuple(sorted(lapsed, key=attrgetter("last_gift_date")))


def gift_size_buckets(stats) -> tuple:
    """
    Count and sum individual gifts per size band.

    Bucket gift counts add up to ``total_gift_count`` and bucket amounts to
    ``total_amount``.
    """
    amounts = np.asarray(stats.sorted_amounts, dtype=float)
    edges = [low for _, low, _ in GIFT_SIZE_BANDS[1:]]
    band = np.digitize(amounts, edges)
    buckets = []
    for index, (label, low, high) in enumerate(GIFT_SIZE_BANDS):
        selected = amounts[band == index]
        buckets.append(
            GiftSizeBucket(
                label=label,
                min_amount=low,
                max_amount=high,
                gifts=int(selected.size),
                total_amount=float(selected.sum()),
                gift_share=safe_ratio(int(selected.size), stats.total_gift_count),
                amount_share=safe_ratio(float(selected.sum()), stats.total_amount),
            )
        )
    return tuple(buckets)
