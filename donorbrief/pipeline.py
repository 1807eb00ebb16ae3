"""
donorbrief.pipeline
===================
Assemble a complete donor brief from a gift stream.

The rollup is built first, sequentially, in a single pass.  Every metric
calculator then reads the frozen rollup and the materialised gift stream;
none of them writes shared state, so they are scheduled through
:class:`joblib.Parallel` with thread workers when ``n_jobs`` asks for it.

Typical usage
-------------
>>> import datetime
>>> from donorbrief import BriefConfig, compute_brief
>>> from donorbrief.utils import make_gift_records
>>> brief = compute_brief(
...     make_gift_records(n_donors=20, random_state=0),
...     BriefConfig(as_of=datetime.date(2025, 1, 1)),
... )
>>> len(brief.monthly_trend)
12
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

import pandas as pd
from joblib import Parallel, delayed

from donorbrief.config import BriefConfig
from donorbrief.metrics import (
    AcknowledgementResult,
    ConcentrationResult,
    GiftSummary,
    MomentumResult,
    PledgeCoverage,
    RetentionResult,
    acknowledgement_performance,
    campaign_breakdown,
    donor_concentration,
    donor_tier,
    donor_tiers,
    gift_size_buckets,
    giving_momentum,
    lapsed_donors,
    monthly_trend,
    pledge_coverage,
    recency_buckets,
    retention_cohorts,
    stewardship_queue,
    summarize_gifts,
    top_donors,
)
from donorbrief.records import GiftStats, OpenPledgeView
from donorbrief.rollup import build_rollup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DonorBrief:
    """Every metric of one brief run, ready for reporting.

    Collections are read-only: ``profiles`` is a mapping proxy and every
    listing is a tuple.
    """
    config: BriefConfig
    summary: GiftSummary
    stats: GiftStats
    profiles: Mapping
    top_donors: tuple
    campaigns: tuple
    lapsed: tuple
    pledges: PledgeCoverage
    gift_size_buckets: tuple
    concentration: ConcentrationResult
    momentum: MomentumResult
    retention: RetentionResult
    recency: tuple
    monthly_trend: tuple
    acknowledgement: AcknowledgementResult
    tiers: tuple
    stewardship_queue: tuple
    warnings: tuple = ()

    def donors_frame(self) -> pd.DataFrame:
        """One row per donor with lifetime totals, tier, lapsed flag and open pledge."""
        columns = [
            "key", "name", "email", "id", "total_amount", "total_gift_count",
            "first_gift_date", "last_gift_date", "pledge_total", "open_amount",
            "tier", "lapsed",
        ]
        cfg = self.config
        rows = []
        for profile in self.profiles.values():
            rows.append(
                {
                    "key": profile.key,
                    "name": profile.display_name,
                    "email": profile.display_email,
                    "id": profile.display_id,
                    "total_amount": profile.total_amount,
                    "total_gift_count": profile.total_gift_count,
                    "first_gift_date": pd.Timestamp(profile.first_gift_date),
                    "last_gift_date": pd.Timestamp(profile.last_gift_date),
                    "pledge_total": profile.pledge_total,
                    "open_amount": OpenPledgeView.from_profile(profile).open_amount,
                    "tier": donor_tier(profile.total_amount, cfg.mid_threshold, cfg.major_threshold),
                    "lapsed": profile.is_lapsed(cfg.as_of, cfg.lapsed_days),
                }
            )
        return pd.DataFrame(rows, columns=columns)


def compute_brief(
    records: Iterable,
    config: Optional[BriefConfig] = None,
    row_warnings: Iterable[str] = (),
    n_jobs: Optional[int] = None,
) -> DonorBrief:
    """
    Build the rollup and run every metric calculator.

    Parameters
    ----------
    records : iterable of GiftRecord
        Validated gifts in input order.
    config : BriefConfig or None, default=None
        Run options; ``None`` uses the defaults with ``as_of`` set to today.
    row_warnings : iterable of str, default=()
        Ingestion warnings, passed through untouched ahead of the identity
        warnings raised while rolling up.
    n_jobs : int or None, default=None
        Number of worker threads for the calculators, following the
        scikit-learn convention (``None`` runs sequentially, ``-1`` uses all
        processors).

    Returns
    -------
    DonorBrief
    """
    cfg = config if config is not None else BriefConfig()
    rollup, gifts = build_rollup(records)
    profiles = rollup.profiles
    stats = rollup.stats
    as_of = cfg.as_of

    tasks = {
        "summary": (summarize_gifts, (profiles, stats)),
        "top_donors": (top_donors, (profiles, cfg.top_n)),
        "campaigns": (campaign_breakdown, (stats,)),
        "lapsed": (lapsed_donors, (profiles, as_of, cfg.lapsed_days)),
        "pledges": (pledge_coverage, (profiles, stats.total_amount, as_of)),
        "gift_size_buckets": (gift_size_buckets, (stats,)),
        "concentration": (donor_concentration, (profiles, stats.total_amount)),
        "momentum": (giving_momentum, (profiles, gifts, as_of, cfg.recent_days, cfg.lapsed_days)),
        "retention": (retention_cohorts, (gifts, rollup.keys, as_of)),
        "recency": (recency_buckets, (profiles, as_of)),
        "monthly_trend": (monthly_trend, (gifts, as_of)),
        "acknowledgement": (
            acknowledgement_performance, (profiles, gifts, rollup.keys, as_of, cfg.ack_days)
        ),
        "tiers": (donor_tiers, (profiles, cfg.mid_threshold, cfg.major_threshold)),
        "stewardship_queue": (
            stewardship_queue, (profiles, as_of, cfg.lapsed_days, cfg.queue_size)
        ),
    }
    logger.debug("Running %d calculators with n_jobs=%r", len(tasks), n_jobs)
    results = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(func)(*args) for func, args in tasks.values()
    )

    warnings = tuple(row_warnings) + rollup.warnings
    logger.info(
        "Brief as of %s: %d gifts, %d donors, %d warnings",
        as_of, stats.total_gift_count, rollup.unique_donors, len(warnings),
    )
    return DonorBrief(
        config=cfg,
        stats=stats,
        profiles=profiles,
        warnings=warnings,
        **dict(zip(tasks, results)),
    )
