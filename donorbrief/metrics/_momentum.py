"""
donorbrief.metrics._momentum
============================
Recent-versus-prior giving momentum.

The recent window is ``[as_of - recent_days, as_of]``; the prior window is
the ``recent_days`` immediately before it, ``[as_of - 2 * recent_days,
as_of - recent_days)``.  Gifts older than the prior window, or dated after
``as_of``, do not enter either window.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from typing import Mapping, Optional, Sequence

from donorbrief.metrics.scoring import mean_or_none, safe_ratio


@dataclass(frozen=True)
class MomentumResult:
    recent_days: int
    recent_start: datetime.date
    prior_start: datetime.date
    prior_end: datetime.date
    recent_total: float
    recent_count: int
    prior_total: float
    prior_count: int
    total_delta: float
    count_delta: int
    total_change_rate: float
    new_donors: int
    reactivated_donors: int
    avg_days_between_gifts: Optional[float]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def _gaps(gift_dates: Sequence[datetime.date]) -> list[int]:
    return [(later - earlier).days for earlier, later in zip(gift_dates, gift_dates[1:])]


def giving_momentum(
    profiles: Mapping,
    records: Sequence,
    as_of: datetime.date,
    recent_days: int = 90,
    lapsed_days: int = 365,
) -> MomentumResult:
    """
    Compare the most recent ``recent_days`` of giving with the window before.

    Parameters
    ----------
    profiles : mapping
        Donor key -> :class:`~donorbrief.records.DonorProfile`.
    records : sequence of GiftRecord
        The full gift stream.
    as_of : datetime.date
        Window anchor.
    recent_days : int, default=90
        Length of each window in days.
    lapsed_days : int, default=365
        A donor whose latest gift falls in the recent window counts as
        reactivated when the gap before that gift exceeds this many days.

    Returns
    -------
    MomentumResult
        ``avg_days_between_gifts`` is the mean of every consecutive gap
        between distinct gift dates across donors with two or more dates,
        or ``None`` when no donor qualifies.
    """
    recent_start = as_of - datetime.timedelta(days=recent_days)
    prior_start = as_of - datetime.timedelta(days=2 * recent_days)

    recent_total = prior_total = 0.0
    recent_count = prior_count = 0
    for record in records:
        if recent_start <= record.gift_date <= as_of:
            recent_total += record.gift_amount
            recent_count += 1
        elif prior_start <= record.gift_date < recent_start:
            prior_total += record.gift_amount
            prior_count += 1

    new_donors = 0
    reactivated = 0
    all_gaps = []
    for profile in profiles.values():
        if profile.first_gift_date >= recent_start:
            new_donors += 1
        gaps = _gaps(profile.gift_dates)
        all_gaps.extend(gaps)
        if gaps and profile.last_gift_date >= recent_start and gaps[-1] > lapsed_days:
            reactivated += 1

    return MomentumResult(
        recent_days=recent_days,
        recent_start=recent_start,
        prior_start=prior_start,
        prior_end=recent_start - datetime.timedelta(days=1),
        recent_total=recent_total,
        recent_count=recent_count,
        prior_total=prior_total,
        prior_count=prior_count,
        total_delta=recent_total - prior_total,
        count_delta=recent_count - prior_count,
        total_change_rate=safe_ratio(recent_total - prior_total, prior_total),
        new_donors=new_donors,
        reactivated_donors=reactivated,
        avg_days_between_gifts=mean_or_none(all_gaps),
    )
