"""
DonorBrief
==========
Donor-gift metrics for fundraising teams: lifetime rollups, concentration,
momentum, retention cohorts, recency, monthly trend, acknowledgement
performance, tiering and stewardship prioritisation.
"""

__version__ = "0.1.0"

from . import preprocessing, rollup, metrics, report, utils
from .config import BriefConfig
from .records import DonorCandidates, DonorProfile, GiftRecord, GiftStats
from .pipeline import DonorBrief, compute_brief

__all__ = [
    "BriefConfig",
    "DonorBrief",
    "DonorCandidates",
    "DonorProfile",
    "GiftRecord",
    "GiftStats",
    "compute_brief",
]
