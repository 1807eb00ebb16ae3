"""
tests/test_stewardship.py
"""

import datetime

import pytest

from donorbrief.metrics import (
    donor_tier,
    donor_tiers,
    overdue_pledges,
    pledge_coverage,
    stewardship_queue,
)
from donorbrief.records import OpenPledgeView
from donorbrief.rollup import build_rollup

D = datetime.date
AS_OF = D(2025, 6, 30)


def test_tier_boundaries():
    assert donor_tier(10_000.0, 1_000.0, 10_000.0) == "major"
    assert donor_tier(9_999.99, 1_000.0, 10_000.0) == "mid"
    assert donor_tier(1_000.0, 1_000.0, 10_000.0) == "mid"
    assert donor_tier(999.99, 1_000.0, 10_000.0) == "small"


def test_tier_summaries(gift):
    amounts = [15_000.0, 10_000.0, 9_999.99, 1_000.0, 999.99, 5.0]
    rollup, _ = build_rollup([gift(f"D{i}", amount=a) for i, a in enumerate(amounts)])
    tiers = donor_tiers(rollup.profiles, mid_threshold=1_000.0, major_threshold=10_000.0)
    assert [t.tier for t in tiers] == ["major", "mid", "small"]
    assert [t.donor_count for t in tiers] == [2, 2, 2]
    assert tiers[0].total_amount == 25_000.0
    assert tiers[0].max_amount is None
    assert sum(t.donor_count for t in tiers) == len(amounts)


def test_tiers_reject_inverted_thresholds():
    with pytest.raises(ValueError, match="mid_threshold"):
        donor_tiers({}, mid_threshold=5_000.0, major_threshold=1_000.0)


def test_empty_tiers_have_zero_shares():
    tiers = donor_tiers({})
    assert all(t.donor_share == 0.0 and t.amount_share == 0.0 for t in tiers)


def test_open_pledge_and_overdue(gift):
    rollup, _ = build_rollup([
        gift("D1", amount=300.0, pledge_amount=500.0,
             pledge_due_date=AS_OF - datetime.timedelta(days=10)),
    ])
    view = OpenPledgeView.from_profile(rollup.profiles["D1"])
    assert view.open_amount == 200.0

    overdue = overdue_pledges(rollup.profiles, AS_OF)
    assert [o.key for o in overdue] == ["D1"]
    assert overdue[0].open_amount == 200.0
    assert overdue[0].next_due == D(2025, 6, 20)


def test_not_overdue_cases(gift):
    rollup, _ = build_rollup([
        gift("due_today", amount=100.0, pledge_amount=500.0, pledge_due_date=AS_OF),
        gift("paid_up", amount=600.0, pledge_amount=500.0, pledge_due_date=D(2024, 1, 1)),
        gift("no_due", amount=100.0, pledge_amount=500.0),
    ])
    assert overdue_pledges(rollup.profiles, AS_OF) == ()


def test_earliest_due_date_decides(gift):
    rollup, _ = build_rollup([
        gift("D1", amount=10.0, pledge_amount=100.0, pledge_due_date=D(2026, 1, 1)),
        gift("D1", amount=10.0, pledge_amount=100.0, pledge_due_date=D(2025, 1, 1)),
    ])
    assert overdue_pledges(rollup.profiles, AS_OF)[0].next_due == D(2025, 1, 1)


def test_pledge_coverage_totals(gift):
    rollup, _ = build_rollup([
        gift("A", amount=300.0, pledge_amount=500.0, pledge_due_date=D(2025, 1, 1)),
        gift("B", amount=900.0, pledge_amount=400.0),
        gift("C", amount=50.0),
    ])
    coverage = pledge_coverage(rollup.profiles, rollup.stats.total_amount, AS_OF)
    assert coverage.total_pledged == 900.0
    assert coverage.total_received == 1250.0
    assert coverage.open_total == 200.0
    assert coverage.overdue_count == 1


def test_stewardship_queue_ranking(gift):
    rollup, _ = build_rollup([
        gift("A", on=AS_OF, amount=1000.0),
        gift("B", on=AS_OF, amount=300.0, pledge_amount=500.0),
        gift("C", on=D(2023, 6, 1), amount=600.0),
    ])
    queue = stewardship_queue(rollup.profiles, AS_OF, lapsed_days=365, queue_size=10)
    assert [e.key for e in queue] == ["C", "A", "B"]
    assert [e.priority_score for e in queue] == [1200.0, 1000.0, 700.0]
    assert [e.lapsed for e in queue] == [True, False, False]
    assert queue[2].pledge.open_amount == 200.0


def test_stewardship_queue_truncates_and_keeps_tie_order(gift):
    rollup, _ = build_rollup([
        gift("first", amount=100.0),
        gift("second", amount=100.0),
        gift("third", amount=100.0),
    ])
    queue = stewardship_queue(rollup.profiles, AS_OF, queue_size=2)
    assert [e.key for e in queue] == ["first", "second"]


def test_stewardship_entry_to_dict(gift):
    rollup, _ = build_rollup([gift("A", amount=10.0, name="Ann")])
    entry = stewardship_queue(rollup.profiles, AS_OF)[0]
    data = entry.to_dict()
    assert data["key"] == "A"
    assert data["name"] == "Ann"
    assert data["priority_score"] == 10.0
    assert data["lapsed"] is False
