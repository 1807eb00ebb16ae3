"""
donorbrief.metrics._trend
=========================
Trailing twelve-month giving trend.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from typing import Sequence

import pandas as pd

TREND_MONTHS = 12


@dataclass(frozen=True)
class MonthlyTotal:
    month: datetime.date
    total: float
    count: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def monthly_trend(records: Sequence, as_of: datetime.date, months: int = TREND_MONTHS) -> tuple:
    """
    Giving per calendar month for the ``months`` months ending with the
    month that contains ``as_of``.

    Parameters
    ----------
    records : sequence of GiftRecord
        The full gift stream.
    as_of : datetime.date
        Any day in the final month of the trend.
    months : int, default=12
        Number of months to report.

    Returns
    -------
    tuple of MonthlyTotal
        Exactly ``months`` contiguous entries, oldest first, each keyed by
        the first day of its month.  Months without gifts report zero.
    """
    periods = pd.period_range(end=pd.Timestamp(as_of).to_period("M"), periods=months, freq="M")
    buckets = {(p.year, p.month): [0.0, 0] for p in periods}

    for record in records:
        bucket = buckets.get((record.gift_date.year, record.gift_date.month))
        if bucket is not None:
            bucket[0] += record.gift_amount
            bucket[1] += 1

    return tuple(
        MonthlyTotal(
            month=datetime.date(p.year, p.month, 1),
            total=buckets[(p.year, p.month)][0],
            count=buckets[(p.year, p.month)][1],
        )
        for p in periods
    )
