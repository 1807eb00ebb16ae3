"""
donorbrief.report._text
=======================
Plain-text console brief.
"""

from __future__ import annotations

from typing import Optional

MAX_LISTED = 10


def format_money(value: float) -> str:
    return f"${value:,.2f}"


def format_pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _optional_days(value) -> str:
    return "n/a" if value is None else f"{value:.1f} days"


def render_text(brief, input_path: Optional[str] = None) -> str:
    """Render a brief as the multi-section console report."""
    cfg = brief.config
    s = brief.summary
    lines = ["Group Scholar Donor Brief", f"As of: {cfg.as_of.isoformat()}"]
    if input_path:
        lines.append(f"Input: {input_path}")

    lines += [
        "",
        "Summary",
        f"- Total raised: {format_money(s.total_raised)}",
        f"- Total gifts: {s.total_gifts}",
        f"- Unique donors: {s.unique_donors}",
        f"- Average gift: {format_money(s.average_gift)}",
        f"- Median gift: {format_money(s.median_gift)}",
        f"- Largest gift: {format_money(s.largest_gift)}",
        f"- First gift: {s.first_gift or 'n/a'}",
        f"- Latest gift: {s.latest_gift or 'n/a'}",
        "",
        "Top Donors",
    ]
    for rank, donor in enumerate(brief.top_donors, start=1):
        lines.append(
            f"{rank}. {donor.label} - {format_money(donor.total_amount)} "
            f"({donor.total_gift_count} gifts)"
        )

    lines += ["", "Campaign Breakdown"]
    for campaign in brief.campaigns[:5]:
        lines.append(f"- {campaign.name}: {format_money(campaign.total)} ({campaign.count} gifts)")

    lines += [
        "",
        f"Lapsed Donors (no gift since {cfg.lapsed_cutoff.isoformat()})",
        f"- Total lapsed: {len(brief.lapsed)}",
    ]
    for donor in brief.lapsed[:MAX_LISTED]:
        lines.append(
            f"  - {donor.label}: last gift {donor.last_gift_date.isoformat()}, "
            f"total {format_money(donor.total_amount)}"
        )

    pledges = brief.pledges
    lines += [
        "",
        "Pledge Coverage",
        f"- Total pledged: {format_money(pledges.total_pledged)}",
        f"- Total received: {format_money(pledges.total_received)}",
        f"- Open pledges: {format_money(pledges.open_total)}",
        f"- Overdue pledges: {pledges.overdue_count}",
    ]
    for item in pledges.overdue[:MAX_LISTED]:
        label = item.name or item.email or item.id or "Unknown Donor"
        lines.append(
            f"  - {label}: {format_money(item.open_amount)} overdue since {item.next_due.isoformat()}"
        )

    lines += ["", "Gift Size Buckets"]
    for bucket in brief.gift_size_buckets:
        lines.append(
            f"- {bucket.label}: {bucket.gifts} gifts, {format_money(bucket.total_amount)} "
            f"({format_pct(bucket.amount_share)})"
        )

    c = brief.concentration
    lines += [
        "",
        "Donor Concentration",
        f"- Top 5 donors: {format_money(c.top5_total)} ({format_pct(c.top5_share)})",
        f"- Top 10 donors: {format_money(c.top10_total)} ({format_pct(c.top10_share)})",
    ]

    m = brief.momentum
    lines += [
        "",
        f"Momentum (last {m.recent_days} days vs prior {m.recent_days})",
        f"- Recent: {format_money(m.recent_total)} ({m.recent_count} gifts)",
        f"- Prior: {format_money(m.prior_total)} ({m.prior_count} gifts)",
        f"- Change: {format_money(m.total_delta)} ({format_pct(m.total_change_rate)})",
        f"- New donors: {m.new_donors}",
        f"- Reactivated donors: {m.reactivated_donors}",
        f"- Average days between gifts: {_optional_days(m.avg_days_between_gifts)}",
    ]

    r = brief.retention
    lines += [
        "",
        "Retention (last 12 months)",
        f"- Prior window: {r.prior_start.isoformat()} to {r.prior_end.isoformat()}",
        f"- Recent window: {r.recent_start.isoformat()} to {r.recent_end.isoformat()}",
        f"- Prior donors: {r.prior_donors}",
        f"- Recent donors: {r.recent_donors}",
        f"- Retained donors: {r.retained_donors} ({format_pct(r.retention_rate)})",
        f"- Reactivated donors: {r.reactivated_donors}",
        f"- Churned donors: {r.churned_donors}",
        f"- Retained value: {format_money(r.retained_prior_total)} -> {format_money(r.retained_recent_total)}",
    ]

    lines += ["", "Recency"]
    for bucket in brief.recency:
        lines.append(
            f"- {bucket.label}: {bucket.donor_count} donors ({format_pct(bucket.donor_share)}), "
            f"{format_money(bucket.total_amount)}"
        )

    lines += ["", "Monthly Trend"]
    for month in brief.monthly_trend:
        lines.append(f"- {month.month.strftime('%Y-%m')}: {format_money(month.total)} ({month.count} gifts)")

    a = brief.acknowledgement
    lines += [
        "",
        f"Acknowledgements ({a.ack_days}-day target)",
        f"- Acknowledged: {a.acknowledged_count} of {a.total_gifts} ({format_pct(a.acknowledged_rate)})",
        f"- On time: {a.on_time_count} ({format_pct(a.on_time_rate)})",
        f"- Average latency: {_optional_days(a.avg_latency_days)}",
        f"- Median latency: {_optional_days(a.median_latency_days)}",
        f"- Unacknowledged: {a.unacknowledged_count} gifts, {format_money(a.unacknowledged_total)}",
    ]
    for donor in a.unacknowledged_donors[:MAX_LISTED]:
        label = donor.name or donor.email or donor.key
        lines.append(
            f"  - {label}: {donor.count} gifts, {format_money(donor.total)}, "
            f"latest {donor.latest_gift_date.isoformat()}"
        )

    lines += ["", "Donor Tiers"]
    for tier in brief.tiers:
        lines.append(f"- {tier.tier}: {tier.donor_count} donors, {format_money(tier.total_amount)}")

    lines += ["", "Stewardship Queue"]
    for rank, entry in enumerate(brief.stewardship_queue, start=1):
        profile = entry.pledge.profile
        flag = " [lapsed]" if entry.lapsed else ""
        lines.append(
            f"{rank}. {profile.label} - score {entry.priority_score:,.2f}, "
            f"open {format_money(entry.pledge.open_amount)}{flag}"
        )

    if brief.warnings:
        lines += ["", "Warnings"]
        lines += [f"- {warning}" for warning in brief.warnings[:MAX_LISTED]]
        remaining = len(brief.warnings) - MAX_LISTED
        if remaining > 0:
            lines.append(f"- {remaining} more warnings")

    return "\n".join(lines) + "\n"
