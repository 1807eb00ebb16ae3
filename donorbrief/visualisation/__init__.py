"""
donorbrief.visualisation
========================
matplotlib / seaborn charts for donor brief metrics.
"""

from ._plots import plot_monthly_trend, plot_recency_buckets, plot_retention_waterfall

__all__ = ["plot_monthly_trend", "plot_recency_buckets", "plot_retention_waterfall"]
