"""
donorbrief.metrics._stewardship
===============================
Open pledges, overdue pledges and the stewardship outreach queue.

Every derived view here wraps a frozen
:class:`~donorbrief.records.DonorProfile` in an
:class:`~donorbrief.records.OpenPledgeView`; profiles are never modified.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, asdict
from operator import attrgetter
from typing import Mapping, Optional

from donorbrief.records import OpenPledgeView, StewardshipEntry


@dataclass(frozen=True)
class OverduePledge:
    key: str
    name: Optional[str]
    email: Optional[str]
    id: Optional[str]
    open_amount: float
    next_due: datetime.date

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class PledgeCoverage:
    total_pledged: float
    total_received: float
    open_total: float
    overdue_count: int
    overdue: tuple = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def open_pledges(profiles: Mapping) -> tuple:
    """One :class:`OpenPledgeView` per donor, in first-seen order."""
    return tuple(OpenPledgeView.from_profile(profile) for profile in profiles.values())


def overdue_pledges(profiles: Mapping, as_of: datetime.date) -> tuple:
    """
    Donors with an open balance whose earliest pledge due date is before
    ``as_of``.
    """
    overdue = []
    for view in open_pledges(profiles):
        if not view.is_overdue(as_of):
            continue
        profile = view.profile
        overdue.append(
            OverduePledge(
                key=profile.key,
                name=profile.display_name,
                email=profile.display_email,
                id=profile.display_id,
                open_amount=view.open_amount,
                next_due=view.next_due,
            )
        )
    return tuple(overdue)


def pledge_coverage(profiles: Mapping, total_received: float, as_of: datetime.date) -> PledgeCoverage:
    overdue = overdue_pledges(profiles, as_of)
    return PledgeCoverage(
        total_pledged=sum(p.pledge_total for p in profiles.values()),
        total_received=total_received,
        open_total=sum(view.open_amount for view in open_pledges(profiles)),
        overdue_count=len(overdue),
        overdue=overdue,
    )


def priority_score(view: OpenPledgeView, lapsed: bool) -> float:
    """``open_amount * 2 + total_amount``, plus ``total_amount`` again if lapsed."""
    total = view.profile.total_amount
    score = view.open_amount * 2 + total
    if lapsed:
        score += total
    return score


def stewardship_queue(
    profiles: Mapping,
    as_of: datetime.date,
    lapsed_days: int = 365,
    queue_size: int = 10,
) -> tuple:
    """
    Rank donors for stewardship outreach.

    Parameters
    ----------
    profiles : mapping
        Donor key -> :class:`~donorbrief.records.DonorProfile`.
    as_of : datetime.date
        Reference date for the lapsed flag.
    lapsed_days : int, default=365
        A donor whose last gift is before ``as_of - lapsed_days`` is lapsed.
    queue_size : int, default=10
        Maximum number of entries returned.

    Returns
    -------
    tuple of StewardshipEntry
        Highest ``priority_score`` first; equal scores keep first-seen
        donor order.
    """
    entries = []
    for view in open_pledges(profiles):
        # open_amount is clamped at zero, so every donor qualifies
        lapsed = view.profile.is_lapsed(as_of, lapsed_days)
        entries.append(
            StewardshipEntry(pledge=view, priority_score=priority_score(view, lapsed), lapsed=lapsed)
        )
    entries.sort(key=attrgetter("priority_score"), reverse=True)
    return tuple(entries[:queue_size])
