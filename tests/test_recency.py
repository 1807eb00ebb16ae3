"""
tests/test_recency.py
"""

import datetime
import math

from donorbrief.metrics import RECENCY_BANDS, recency_buckets
from donorbrief.rollup import build_rollup

AS_OF = datetime.date(2025, 6, 30)


def _days_ago(n):
    return AS_OF - datetime.timedelta(days=n)


def test_band_edges(gift):
    ages = [0, 30, 31, 90, 91, 180, 181, 365, 366, 1000, -5]
    records = [gift(f"D{i}", on=_days_ago(age), amount=100.0) for i, age in enumerate(ages)]
    rollup, _ = build_rollup(records)
    buckets = recency_buckets(rollup.profiles, AS_OF)

    assert [b.label for b in buckets] == [label for label, _, _ in RECENCY_BANDS]
    assert [b.donor_count for b in buckets] == [3, 2, 2, 2, 2]
    assert [b.total_amount for b in buckets] == [300.0, 200.0, 200.0, 200.0, 200.0]
    assert math.isclose(buckets[0].donor_share, 3 / 11)
    assert math.isclose(buckets[0].amount_share, 300.0 / 1100.0)
    assert buckets[-1].max_days is None


def test_uses_last_gift_and_lifetime_total(gift):
    rollup, _ = build_rollup([
        gift("A", on=_days_ago(400), amount=50.0),
        gift("A", on=_days_ago(10), amount=25.0),
    ])
    buckets = recency_buckets(rollup.profiles, AS_OF)
    assert buckets[0].donor_count == 1
    assert buckets[0].total_amount == 75.0
    assert buckets[-1].donor_count == 0


def test_empty_buckets_have_zero_shares():
    buckets = recency_buckets({}, AS_OF)
    assert len(buckets) == 5
    assert all(b.donor_count == 0 for b in buckets)
    assert all(b.donor_share == 0.0 and b.amount_share == 0.0 for b in buckets)
