"""
donorbrief.metrics._tiering
===========================
Lifetime-value donor tiers.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Mapping, Optional

from donorbrief.metrics.scoring import safe_ratio


@dataclass(frozen=True)
class TierSummary:
    tier: str
    min_amount: float
    max_amount: Optional[float]
    donor_count: int
    total_amount: float
    donor_share: float
    amount_share: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def donor_tier(total_amount: float, mid_threshold: float, major_threshold: float) -> str:
    """Return ``"major"``, ``"mid"`` or ``"small"`` for a lifetime total."""
    if total_amount >= major_threshold:
        return "major"
    if total_amount >= mid_threshold:
        return "mid"
    return "small"


def donor_tiers(
    profiles: Mapping,
    mid_threshold: float = 1_000.0,
    major_threshold: float = 10_000.0,
) -> tuple:
    """
    Count donors and giving per tier, ordered ``major``, ``mid``, ``small``.

    Parameters
    ----------
    profiles : mapping
        Donor key -> :class:`~donorbrief.records.DonorProfile`.
    mid_threshold : float, default=1000
        Lower bound (inclusive) of the ``mid`` tier.
    major_threshold : float, default=10000
        Lower bound (inclusive) of the ``major`` tier.

    Returns
    -------
    tuple of TierSummary
        Always three entries.

    Raises
    ------
    ValueError
        If ``mid_threshold >= major_threshold``.
    """
    if mid_threshold >= major_threshold:
        raise ValueError(
            f"`mid_threshold` must be below `major_threshold`, "
            f"got {mid_threshold!r} >= {major_threshold!r}."
        )

    bounds = {
        "major": (major_threshold, None),
        "mid": (mid_threshold, major_threshold),
        "small": (0.0, mid_threshold),
    }
    counts = dict.fromkeys(bounds, 0)
    totals = dict.fromkeys(bounds, 0.0)
    for profile in profiles.values():
        tier = donor_tier(profile.total_amount, mid_threshold, major_threshold)
        counts[tier] += 1
        totals[tier] += profile.total_amount

    donor_total = sum(counts.values())
    amount_total = sum(totals.values())
    return tuple(
        TierSummary(
            tier=tier,
            min_amount=low,
            max_amount=high,
            donor_count=counts[tier],
            total_amount=totals[tier],
            donor_share=safe_ratio(counts[tier], donor_total),
            amount_share=safe_ratio(totals[tier], amount_total),
        )
        for tier, (low, high) in bounds.items()
    )
