"""
donorbrief.rollup
=================
Donor identity resolution and the single-pass donor / gift rollup.
"""

from ._identity import resolve_donor_key
from ._builder import DonorProfileBuilder, GiftStatsBuilder, Rollup, build_rollup

__all__ = [
    "resolve_donor_key",
    "DonorProfileBuilder",
    "GiftStatsBuilder",
    "Rollup",
    "build_rollup",
]
