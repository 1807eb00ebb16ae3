"""
donorbrief.metrics
==================
Donor KPI calculators.  Each reads the frozen rollup and returns its own
value object.
"""

from .scoring import donor_retention_rate, safe_ratio
from ._concentration import ConcentrationResult, donor_concentration, rank_donors
from ._momentum import MomentumResult, giving_momentum
from ._retention import RetentionResult, retention_cohorts
from ._recency import RECENCY_BANDS, RecencyBucket, recency_buckets
from ._trend import MonthlyTotal, monthly_trend
from ._acknowledgement import (
    AcknowledgementResult,
    UnacknowledgedDonor,
    acknowledgement_performance,
)
from ._tiering import TierSummary, donor_tier, donor_tiers
from ._stewardship import (
    OverduePledge,
    PledgeCoverage,
    open_pledges,
    overdue_pledges,
    pledge_coverage,
    priority_score,
    stewardship_queue,
)
from ._summary import (
    GIFT_SIZE_BANDS,
    CampaignSummary,
    GiftSizeBucket,
    GiftSummary,
    campaign_breakdown,
    gift_size_buckets,
    lapsed_donors,
    summarize_gifts,
    top_donors,
)

__all__ = [
    "donor_retention_rate",
    "safe_ratio",
    "ConcentrationResult",
    "donor_concentration",
    "rank_donors",
    "MomentumResult",
    "giving_momentum",
    "RetentionResult",
    "retention_cohorts",
    "RECENCY_BANDS",
    "RecencyBucket",
    "recency_buckets",
    "MonthlyTotal",
    "monthly_trend",
    "AcknowledgementResult",
    "UnacknowledgedDonor",
    "acknowledgement_performance",
    "TierSummary",
    "donor_tier",
    "donor_tiers",
    "OverduePledge",
    "PledgeCoverage",
    "open_pledges",
    "overdue_pledges",
    "pledge_coverage",
    "priority_score",
    "stewardship_queue",
    "GIFT_SIZE_BANDS",
    "CampaignSummary",
    "GiftSizeBucket",
    "GiftSummary",
    "campaign_breakdown",
    "gift_size_buckets",
    "lapsed_donors",
    "summarize_gifts",
    "top_donors",
]
