"""
donorbrief.metrics._concentration
=================================
How much of total giving comes from the largest donors.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from operator import attrgetter
from typing import Mapping

from donorbrief.metrics.scoring import safe_ratio


@dataclass(frozen=True)
class ConcentrationResult:
    donor_count: int
    total_amount: float
    top5_total: float
    top10_total: float
    top5_share: float
    top10_share: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def rank_donors(profiles: Mapping) -> tuple:
    """Donor profiles by lifetime total, largest first.

    ``sorted`` is stable with ``reverse=True``, so donors with equal totals
    keep their first-seen order.
    """
    return tuple(sorted(profiles.values(), key=attrgetter("total_amount"), reverse=True))


def donor_concentration(profiles: Mapping, total_amount: float) -> ConcentrationResult:
    """
    Share of total giving contributed by the top 5 and top 10 donors.

    When fewer donors exist the sums run over however many there are.

    Parameters
    ----------
    profiles : mapping
        Donor key -> :class:`~donorbrief.records.DonorProfile`.
    total_amount : float
        Grand total of all gifts.

    Returns
    -------
    ConcentrationResult
        Shares are ``0.0`` when ``total_amount`` is zero.
    """
    totals = [profile.total_amount for profile in rank_donors(profiles)]
    top5 = sum(totals[:5])
    top10 = sum(totals[:10])
    return ConcentrationResult(
        donor_count=len(totals),
        total_amount=total_amount,
        top5_total=top5,
        top10_total=top10,
        top5_share=safe_ratio(top5, total_amount),
        top10_share=safe_ratio(top10, total_amount),
    )
