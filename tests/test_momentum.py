"""
tests/test_momentum.py
"""

import datetime
import math

import pytest

from donorbrief.metrics import giving_momentum
from donorbrief.rollup import build_rollup

D = datetime.date
AS_OF = D(2025, 6, 30)


@pytest.fixture
def momentum(gift):
    records = [
        gift("A", on=D(2023, 1, 10), amount=50.0),
        gift("A", on=D(2025, 4, 1), amount=100.0),     # first day of recent window
        gift("B", on=D(2025, 3, 31), amount=200.0),    # last day of prior window
        gift("B", on=AS_OF, amount=300.0),
        gift("C", on=D(2025, 5, 15), amount=75.0),
        gift("E", on=D(2024, 12, 31), amount=1000.0),  # older than prior window
    ]
    rollup, gifts = build_rollup(records)
    return giving_momentum(rollup.profiles, gifts, AS_OF, recent_days=90, lapsed_days=365)


def test_window_boundaries(momentum):
    assert momentum.recent_start == D(2025, 4, 1)
    assert momentum.prior_start == D(2025, 1, 1)
    assert momentum.prior_end == D(2025, 3, 31)


def test_window_totals(momentum):
    assert momentum.recent_total == 475.0
    assert momentum.recent_count == 3
    assert momentum.prior_total == 200.0
    assert momentum.prior_count == 1
    assert momentum.total_delta == 275.0
    assert momentum.count_delta == 2
    assert math.isclose(momentum.total_change_rate, 1.375)


def test_new_and_reactivated_donors(momentum):
    assert momentum.new_donors == 1
    # A came back after an 812-day gap; B's gap is 91 days
    assert momentum.reactivated_donors == 1


def test_average_gap(momentum):
    assert math.isclose(momentum.avg_days_between_gifts, (812 + 91) / 2)


def test_gifts_after_as_of_are_outside_windows(gift):
    rollup, gifts = build_rollup([gift("A", on=AS_OF + datetime.timedelta(days=3), amount=10.0)])
    result = giving_momentum(rollup.profiles, gifts, AS_OF)
    assert result.recent_total == 0.0
    assert result.recent_count == 0


def test_no_repeat_donors_has_no_average_gap(gift):
    rollup, gifts = build_rollup([gift("A"), gift("B")])
    result = giving_momentum(rollup.profiles, gifts, AS_OF)
    assert result.avg_days_between_gifts is None
    assert result.reactivated_donors == 0


def test_empty_input():
    result = giving_momentum({}, (), AS_OF)
    assert result.recent_total == 0.0
    assert result.prior_total == 0.0
    assert result.total_change_rate == 0.0
    assert result.new_donors == 0
    assert result.avg_days_between_gifts is None
