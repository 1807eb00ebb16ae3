"""
donorbrief.metrics._retention
=============================
Twelve-month donor retention cohorts.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from typing import Sequence

from donorbrief.metrics.scoring import donor_retention_rate, safe_ratio

WINDOW_DAYS = 365


@dataclass(frozen=True)
class RetentionResult:
    recent_start: datetime.date
    recent_end: datetime.date
    prior_start: datetime.date
    prior_end: datetime.date
    prior_donors: int
    recent_donors: int
    retained_donors: int
    reactivated_donors: int
    churned_donors: int
    retention_rate: float
    prior_total: float
    recent_total: float
    retained_prior_total: float
    retained_recent_total: float
    value_retention_rate: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def retention_cohorts(
    records: Sequence,
    keys: Sequence[str],
    as_of: datetime.date,
) -> RetentionResult:
    """
    Classify donors by giving in two adjacent 365-day windows.

    The recent window is ``[as_of - 365, as_of]`` and the prior window is
    ``[recent_start - 365, recent_start - 1]``, both inclusive.  Relative to
    those windows each donor with any windowed giving is exactly one of
    *retained* (both windows), *reactivated* (recent only) or *churned*
    (prior only), so ``retained + churned == prior_donors`` and
    ``retained + reactivated == recent_donors``.

    Parameters
    ----------
    records : sequence of GiftRecord
        The full gift stream.
    keys : sequence of str
        Donor key of each record, aligned with ``records``.
    as_of : datetime.date
        End of the recent window.

    Returns
    -------
    RetentionResult
        ``retention_rate`` is retained / prior donors and
        ``value_retention_rate`` is the retained donors' recent giving over
        all prior-window giving; both are ``0.0`` on a zero denominator.
    """
    recent_start = as_of - datetime.timedelta(days=WINDOW_DAYS)
    prior_start = recent_start - datetime.timedelta(days=WINDOW_DAYS)
    prior_end = recent_start - datetime.timedelta(days=1)

    windows = {}
    for record, key in zip(records, keys):
        if recent_start <= record.gift_date <= as_of:
            prior, recent = windows.get(key, (0.0, 0.0))
            windows[key] = (prior, recent + record.gift_amount)
        elif prior_start <= record.gift_date <= prior_end:
            prior, recent = windows.get(key, (0.0, 0.0))
            windows[key] = (prior + record.gift_amount, recent)

    prior_keys = {key for key, (prior, _) in windows.items() if prior > 0}
    recent_keys = {key for key, (_, recent) in windows.items() if recent > 0}

    retained = reactivated = churned = 0
    prior_total = recent_total = retained_prior = retained_recent = 0.0
    for prior, recent in windows.values():
        prior_total += prior
        recent_total += recent
        if prior > 0 and recent > 0:
            retained += 1
            retained_prior += prior
            retained_recent += recent
        elif recent > 0:
            reactivated += 1
        elif prior > 0:
            churned += 1

    return RetentionResult(
        recent_start=recent_start,
        recent_end=as_of,
        prior_start=prior_start,
        prior_end=prior_end,
        prior_donors=len(prior_keys),
        recent_donors=len(recent_keys),
        retained_donors=retained,
        reactivated_donors=reactivated,
        churned_donors=churned,
        retention_rate=donor_retention_rate(recent_keys, prior_keys),
        prior_total=prior_total,
        recent_total=recent_total,
        retained_prior_total=retained_prior,
        retained_recent_total=retained_recent,
        value_retention_rate=safe_ratio(retained_recent, prior_total),
    )
