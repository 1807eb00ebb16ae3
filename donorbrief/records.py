"""
donorbrief.records
==================
Canonical gift records and the frozen donor / gift rollups built from them.

A :class:`GiftRecord` is what the ingestion layer hands to the core.  The
rollup builder folds the record stream into one :class:`DonorProfile` per
donor key plus a single :class:`GiftStats`; both are immutable once built so
the metric calculators can share them freely.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class DonorCandidates:
    """Raw identity signals carried by one gift row."""
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class GiftRecord:
    """A single validated gift.

    ``gift_date`` and ``gift_amount`` are trusted: the ingestion layer only
    emits records with a parseable date and a strictly positive amount.
    ``row_index`` is the 1-based position of the row among the source data
    rows and names the synthetic ``unknown-<index>`` donor key;
    ``row_number`` is the source line quoted in warnings.  Both are optional.
    """
    gift_date: datetime.date
    gift_amount: float
    donor: DonorCandidates = field(default_factory=DonorCandidates)
    pledge_amount: Optional[float] = None
    pledge_due_date: Optional[datetime.date] = None
    campaign: str = "Unspecified"
    acknowledged: bool = False
    ack_date: Optional[datetime.date] = None
    row_index: Optional[int] = None
    row_number: Optional[int] = None


@dataclass(frozen=True)
class DonorProfile:
    """Lifetime rollup for one donor key."""
    key: str
    display_name: Optional[str]
    display_email: Optional[str]
    display_id: Optional[str]
    total_amount: float
    total_gift_count: int
    first_gift_date: datetime.date
    last_gift_date: datetime.date
    pledge_total: float = 0.0
    pledge_due_dates: tuple = ()
    gift_dates: tuple = ()

    @property
    def label(self) -> str:
        """Human readable name: name, then email, then id."""
        for value in (self.display_name, self.display_email, self.display_id):
            if value and value.strip():
                return value.strip()
        return "Unknown Donor"

    def is_lapsed(self, as_of: datetime.date, lapsed_days: int) -> bool:
        return self.last_gift_date < as_of - datetime.timedelta(days=lapsed_days)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CampaignTotal:
    total: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class GiftStats:
    """Global totals across every gift in the run."""
    total_amount: float = 0.0
    total_gift_count: int = 0
    sorted_amounts: tuple = ()
    campaign_totals: Mapping = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_amount": self.total_amount,
            "total_gift_count": self.total_gift_count,
            "sorted_amounts": self.sorted_amounts,
            "campaign_totals": {name: asdict(t) for name, t in self.campaign_totals.items()},
        }


@dataclass(frozen=True)
class OpenPledgeView:
    """A donor profile paired with its unpaid pledge balance."""
    profile: DonorProfile
    open_amount: float

    @classmethod
    def from_profile(cls, profile: DonorProfile) -> "OpenPledgeView":
        return cls(
            profile=profile,
            open_amount=max(0.0, profile.pledge_total - profile.total_amount),
        )

    @property
    def next_due(self) -> Optional[datetime.date]:
        """Earliest pledge due date, or ``None`` when no due date was given."""
        if not self.profile.pledge_due_dates:
            return None
        return min(self.profile.pledge_due_dates)

    def is_overdue(self, as_of: datetime.date) -> bool:
        if self.open_amount <= 0:
            return False
        next_due = self.next_due
        return next_due is not None and next_due < as_of


@dataclass(frozen=True)
class StewardshipEntry:
    """One row of the stewardship queue."""
    pledge: OpenPledgeView
    priority_score: float
    lapsed: bool

    @property
    def key(self) -> str:
        return self.pledge.profile.key

    def to_dict(self) -> dict:
        profile = self.pledge.profile
        return {
            "key": profile.key,
            "name": profile.display_name,
            "email": profile.display_email,
            "id": profile.display_id,
            "total_amount": profile.total_amount,
            "open_amount": self.pledge.open_amount,
            "last_gift_date": profile.last_gift_date,
            "priority_score": self.priority_score,
            "lapsed": self.lapsed,
        }
