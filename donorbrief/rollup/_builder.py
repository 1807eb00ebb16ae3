"""
donorbrief.rollup._builder
==========================
Single-pass fold of the gift stream into donor profiles and global totals.

The builders here are mutable and private to :func:`build_rollup`.  Once the
stream is exhausted every builder is frozen into the immutable
:class:`~donorbrief.records.DonorProfile` / :class:`~donorbrief.records.GiftStats`
value types, which is all the metric calculators ever see.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from donorbrief.records import (
    CampaignTotal,
    DonorProfile,
    GiftRecord,
    GiftStats,
)
from donorbrief.rollup._identity import resolve_donor_key

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def get_or_insert(mapping: dict, key, factory: Callable):
    """Return ``mapping[key]``, inserting ``factory()`` first when absent."""
    if key not in mapping:
        mapping[key] = factory()
    return mapping[key]


class DonorProfileBuilder:
    """Mutable accumulator for one donor key."""

    def __init__(self, key: str, first_gift: GiftRecord) -> None:
        self.key = key
        self.display_name = None
        self.display_email = None
        self.display_id = None
        self.total_amount = 0.0
        self.total_gift_count = 0
        self.first_gift_date = first_gift.gift_date
        self.last_gift_date = first_gift.gift_date
        self.pledge_total = 0.0
        # dicts as insertion-ordered sets
        self._pledge_due_dates = {}
        self._gift_dates = {}

    def add(self, record: GiftRecord) -> None:
        candidates = record.donor
        if _blank(self.display_name) and not _blank(candidates.name):
            self.display_name = candidates.name.strip()
        if _blank(self.display_email) and not _blank(candidates.email):
            self.display_email = candidates.email.strip()
        if _blank(self.display_id) and not _blank(candidates.id):
            self.display_id = candidates.id.strip()

        self.total_amount += record.gift_amount
        self.total_gift_count += 1
        self.first_gift_date = min(self.first_gift_date, record.gift_date)
        self.last_gift_date = max(self.last_gift_date, record.gift_date)
        self._gift_dates[record.gift_date] = None

        if record.pledge_amount is not None and record.pledge_amount > 0:
            self.pledge_total += record.pledge_amount
            if record.pledge_due_date is not None:
                self._pledge_due_dates[record.pledge_due_date] = None

    def freeze(self) -> DonorProfile:
        return DonorProfile(
            key=self.key,
            display_name=self.display_name,
            display_email=self.display_email,
            display_id=self.display_id,
            total_amount=self.total_amount,
            total_gift_count=self.total_gift_count,
            first_gift_date=self.first_gift_date,
            last_gift_date=self.last_gift_date,
            pledge_total=self.pledge_total,
            pledge_due_dates=tuple(sorted(self._pledge_due_dates)),
            gift_dates=tuple(sorted(self._gift_dates)),
        )


class GiftStatsBuilder:
    """Mutable accumulator for run-wide totals."""

    def __init__(self) -> None:
        self.total_amount = 0.0
        self.total_gift_count = 0
        self.amounts = []
        self.campaigns = {}

    def add(self, record: GiftRecord) -> None:
        self.total_amount += record.gift_amount
        self.total_gift_count += 1
        self.amounts.append(record.gift_amount)
        campaign = record.campaign.strip() if record.campaign and record.campaign.strip() else "Unspecified"
        total, count = self.campaigns.get(campaign, (0.0, 0))
        self.campaigns[campaign] = (total + record.gift_amount, count + 1)

    def freeze(self) -> GiftStats:
        return GiftStats(
            total_amount=self.total_amount,
            total_gift_count=self.total_gift_count,
            sorted_amounts=tuple(sorted(self.amounts)),
            campaign_totals=MappingProxyType({
                name: CampaignTotal(total=total, count=count)
                for name, (total, count) in self.campaigns.items()
            }),
        )


@dataclass(frozen=True)
class Rollup:
    """Frozen output of :func:`build_rollup`.

    ``profiles`` is a read-only mapping of donor key to profile in
    first-seen order.  ``keys`` is aligned with the input records and gives
    each record's resolved key so calculators that re-read the gift stream
    never re-run the identity cascade.
    """
    profiles: Mapping
    stats: GiftStats
    keys: tuple
    warnings: tuple

    @property
    def unique_donors(self) -> int:
        return len(self.profiles)


def build_rollup(records: Iterable[GiftRecord]) -> tuple[Rollup, tuple]:
    """Fold gift records into donor profiles and global gift stats.

    Parameters
    ----------
    records : iterable of GiftRecord
        Validated gift records in input order.

    Returns
    -------
    rollup : Rollup
        Frozen profiles, stats, per-record donor keys and identity warnings.
    records : tuple of GiftRecord
        The consumed records, materialised so later passes can re-read them.
    """
    builders = {}
    stats = GiftStatsBuilder()
    keys = []
    identity_warnings = []
    consumed = []

    for position, record in enumerate(records, start=1):
        row_index = record.row_index if record.row_index is not None else position
        key, warning = resolve_donor_key(record.donor, row_index, record.row_number)
        if warning is not None:
            identity_warnings.append(warning)

        builder = get_or_insert(builders, key, lambda: DonorProfileBuilder(key, record))
        builder.add(record)
        stats.add(record)
        keys.append(key)
        consumed.append(record)

    rollup = Rollup(
        profiles=MappingProxyType({key: builder.freeze() for key, builder in builders.items()}),
        stats=stats.freeze(),
        keys=tuple(keys),
        warnings=tuple(identity_warnings),
    )
    logger.debug(
        "Rolled up %d gifts into %d donor profiles", rollup.stats.total_gift_count, rollup.unique_donors
    )
    return rollup, tuple(consumed)
