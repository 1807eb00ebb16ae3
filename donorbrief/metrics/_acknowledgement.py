"""
donorbrief.metrics._acknowledgement
===================================
Gift acknowledgement performance.

A gift is *overdue for acknowledgement* when it is unacknowledged and at
least ``ack_days`` old on ``as_of``.  Latency is the number of days from
gift to acknowledgement and is measured only for acknowledged gifts with an
``ack_date``; an acknowledgement dated before its gift is not measurable and
is left out of the latency statistics entirely.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from operator import attrgetter
from typing import Mapping, Optional, Sequence

from donorbrief.metrics.scoring import mean_or_none, median_or_none, safe_ratio


@dataclass(frozen=True)
class UnacknowledgedDonor:
    key: str
    name: Optional[str]
    email: Optional[str]
    total: float
    count: int
    latest_gift_date: datetime.date

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class AcknowledgementResult:
    ack_days: int
    cutoff: datetime.date
    total_gifts: int
    acknowledged_count: int
    acknowledged_rate: float
    unacknowledged_count: int
    unacknowledged_total: float
    avg_latency_days: Optional[float]
    median_latency_days: Optional[float]
    on_time_count: int
    on_time_rate: float
    unacknowledged_donors: tuple = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def acknowledgement_performance(
    profiles: Mapping,
    records: Sequence,
    keys: Sequence[str],
    as_of: datetime.date,
    ack_days: int = 7,
) -> AcknowledgementResult:
    """
    Measure how promptly gifts are acknowledged.

    Parameters
    ----------
    profiles : mapping
        Donor key -> :class:`~donorbrief.records.DonorProfile`, used for the
        display fields of unacknowledged donors.
    records : sequence of GiftRecord
        The full gift stream.
    keys : sequence of str
        Donor key of each record, aligned with ``records``.
    as_of : datetime.date
        Reference date for the grace period.
    ack_days : int, default=7
        Grace period in days.

    Returns
    -------
    AcknowledgementResult
        ``on_time_rate`` is measured against *all* gifts, not only the
        acknowledged ones.  ``unacknowledged_donors`` is ordered by total
        descending, ties in first-seen order.
    """
    cutoff = as_of - datetime.timedelta(days=ack_days)

    acknowledged = 0
    on_time = 0
    latencies = []
    pending = {}
    for record, key in zip(records, keys):
        if record.acknowledged:
            acknowledged += 1
        elif record.gift_date <= cutoff:
            total, count, latest = pending.get(key, (0.0, 0, record.gift_date))
            pending[key] = (total + record.gift_amount, count + 1, max(latest, record.gift_date))

        if record.acknowledged and record.ack_date is not None:
            latency = (record.ack_date - record.gift_date).days
            if latency >= 0:
                latencies.append(latency)
                if latency <= ack_days:
                    on_time += 1

    donors = [
        UnacknowledgedDonor(
            key=key,
            name=profiles[key].display_name if key in profiles else None,
            email=profiles[key].display_email if key in profiles else None,
            total=total,
            count=count,
            latest_gift_date=latest,
        )
        for key, (total, count, latest) in pending.items()
    ]
    donors.sort(key=attrgetter("total"), reverse=True)

    total_gifts = len(records)
    return AcknowledgementResult(
        ack_days=ack_days,
        cutoff=cutoff,
        total_gifts=total_gifts,
        acknowledged_count=acknowledged,
        acknowledged_rate=safe_ratio(acknowledged, total_gifts),
        unacknowledged_count=sum(d.count for d in donors),
        unacknowledged_total=sum(d.total for d in donors),
        avg_latency_days=mean_or_none(latencies),
        median_latency_days=median_or_none(latencies),
        on_time_count=on_time,
        on_time_rate=safe_ratio(on_time, total_gifts),
        unacknowledged_donors=tuple(donors),
    )
