"""
donorbrief.config
=================
Run configuration shared by every metric calculator.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field, asdict

from donorbrief.utils._validation import (
    validate_as_of,
    validate_non_negative_int,
    validate_positive_int,
    validate_thresholds,
)


@dataclass(frozen=True)
class BriefConfig:
    """Immutable options for one brief run.

    Parameters
    ----------
    as_of : datetime.date, default=today
        Anchor date for every window, lapsed, and overdue computation.
    lapsed_days : int, default=365
        Days without a gift after which a donor counts as lapsed.
    recent_days : int, default=90
        Length of the momentum comparison window.
    major_threshold : float, default=10000
        Lifetime total at or above which a donor is ``major``.
    mid_threshold : float, default=1000
        Lifetime total at or above which a donor is ``mid``.  Must be below
        ``major_threshold``.
    ack_days : int, default=7
        Grace period for acknowledging a gift.
    top_n : int, default=5
        Number of donors listed in the top-donor table.
    queue_size : int, default=10
        Maximum length of the stewardship queue.

    Raises
    ------
    ValueError
        If any option is out of range (see :mod:`donorbrief.utils._validation`).
    """
    as_of: datetime.date = field(default_factory=datetime.date.today)
    lapsed_days: int = 365
    recent_days: int = 90
    major_threshold: float = 10_000.0
    mid_threshold: float = 1_000.0
    ack_days: int = 7
    top_n: int = 5
    queue_size: int = 10

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "as_of", validate_as_of(self.as_of))
        validate_positive_int("lapsed_days", self.lapsed_days)
        validate_positive_int("recent_days", self.recent_days)
        validate_non_negative_int("ack_days", self.ack_days)
        validate_positive_int("top_n", self.top_n)
        validate_positive_int("queue_size", self.queue_size)
        validate_thresholds(self.mid_threshold, self.major_threshold)

    @property
    def lapsed_cutoff(self) -> datetime.date:
        return self.as_of - datetime.timedelta(days=self.lapsed_days)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)
