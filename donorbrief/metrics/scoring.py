"""
donorbrief.metrics.scoring
==========================
"""

import numpy as np
from typing import Collection, Optional, Sequence


def safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def donor_retention_rate(recent_keys: Collection, prior_keys: Collection) -> float:
    """
    Fraction of prior-window donors who gave again in the recent window.

    Parameters
    ----------
    recent_keys : collection of str
        Donor keys with giving in the recent window.
    prior_keys : collection of str
        Donor keys with giving in the prior window.

    Returns
    -------
    float
        ``|recent & prior| / |prior|``, or ``0.0`` when no donor gave in the
        prior window.
    """
    prior = set(prior_keys)
    return safe_ratio(len(prior.intersection(recent_keys)), len(prior))


def mean_or_none(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return float(np.mean(values))


def median_or_none(values: Sequence[float]) -> Optional[float]:
    if len(values) == 0:
        return None
    return float(np.median(values))
