"""
tests/test_retention.py
"""

import datetime
import math

import pytest

from donorbrief.metrics import retention_cohorts
from donorbrief.rollup import build_rollup

D = datetime.date
AS_OF = D(2025, 6, 30)


@pytest.fixture
def retention(gift):
    records = [
        gift("R", on=D(2023, 8, 1), amount=100.0),
        gift("R", on=D(2025, 1, 1), amount=200.0),
        gift("X", on=D(2020, 1, 1), amount=999.0),
        gift("X", on=D(2025, 3, 1), amount=50.0),
        gift("Y", on=D(2024, 6, 29), amount=400.0),    # last day of prior window
        gift("Z", on=D(2024, 6, 30), amount=25.0),     # first day of recent window
        gift("W", on=D(2022, 1, 1), amount=10.0),
    ]
    rollup, gifts = build_rollup(records)
    return retention_cohorts(gifts, rollup.keys, AS_OF)


def test_windows(retention):
    assert retention.recent_end == AS_OF
    assert retention.recent_start == AS_OF - datetime.timedelta(days=365)
    assert retention.recent_start == D(2024, 6, 30)
    assert retention.prior_start == retention.recent_start - datetime.timedelta(days=365)
    assert retention.prior_end == retention.recent_start - datetime.timedelta(days=1)


def test_cohort_counts(retention):
    assert retention.prior_donors == 2
    assert retention.recent_donors == 3
    assert retention.retained_donors == 1
    assert retention.reactivated_donors == 2
    assert retention.churned_donors == 1
    assert retention.retention_rate == 0.5


def test_partition_identities(retention):
    assert retention.retained_donors + retention.churned_donors == retention.prior_donors
    assert retention.retained_donors + retention.reactivated_donors == retention.recent_donors


def test_value_retention(retention):
    assert retention.prior_total == 500.0
    assert retention.recent_total == 275.0
    assert retention.retained_prior_total == 100.0
    assert retention.retained_recent_total == 200.0
    assert math.isclose(retention.value_retention_rate, 0.4)


def test_no_prior_donors_gives_zero_rate(gift):
    rollup, gifts = build_rollup([gift("A", on=AS_OF)])
    result = retention_cohorts(gifts, rollup.keys, AS_OF)
    assert result.prior_donors == 0
    assert result.retention_rate == 0.0
    assert result.value_retention_rate == 0.0
    assert result.reactivated_donors == 1


def test_empty_input():
    result = retention_cohorts((), (), AS_OF)
    assert result.prior_donors == result.recent_donors == 0
    assert result.retention_rate == 0.0
