import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd


def plot_monthly_trend(trend) -> plt.Axes:
    """
    Plots the trailing monthly giving totals as a bar chart with the gift
    count overlaid as a line on a secondary axis.

    Parameters
    ----------
    trend : sequence of MonthlyTotal
        Output of :func:`donorbrief.metrics.monthly_trend`.

    Returns
    -------
    matplotlib.axes.Axes
        The primary (dollar) axes object for further customization.
    """
    df = pd.DataFrame({
        'Month': [m.month.strftime('%Y-%m') for m in trend],
        'Total': [m.total for m in trend],
        'Gifts': [m.count for m in trend],
    })
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.barplot(data=df, x='Month', y='Total', color='steelblue', ax=ax)

    counts_ax = ax.twinx()
    counts_ax.plot(range(len(df)), df['Gifts'], color='black', marker='o')
    counts_ax.set_ylabel("Gifts")

    ax.set_title("Monthly Giving Trend")
    ax.set_xlabel("Month")
    ax.set_ylabel("Total Raised ($)")
    ax.tick_params(axis='x', rotation=45)

    return ax


def plot_recency_buckets(buckets) -> plt.Axes:
    """
    Plots donor counts per days-since-last-gift band.

    Parameters
    ----------
    buckets : sequence of RecencyBucket
        Output of :func:`donorbrief.metrics.recency_buckets`.

    Returns
    -------
    matplotlib.axes.Axes
    """
    df = pd.DataFrame({
        'Band': [b.label for b in buckets],
        'Donors': [b.donor_count for b in buckets],
    })
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.barplot(data=df, x='Band', y='Donors', color='seagreen', ax=ax)
    ax.set_title("Donors by Days Since Last Gift")
    ax.set_xlabel("Days Since Last Gift")
    ax.set_ylabel("Number of Donors")
    return ax


def plot_retention_waterfall(retention) -> plt.Axes:
    """
    Generates a step-by-step waterfall chart from the prior-year donor
    cohort to the recent-year cohort.

    Parameters
    ----------
    retention : RetentionResult
        Output of :func:`donorbrief.metrics.retention_cohorts`.

    Returns
    -------
    matplotlib.axes.Axes
        The underlying axes object for further customization.
    """
    categories = ['Prior Year', 'Churned', 'Reactivated', 'Recent Year']

    prior = retention.prior_donors
    churned = retention.churned_donors
    reactivated = retention.reactivated_donors
    # churned acts as a negative flow; recent == prior - churned + reactivated
    values = [prior, -churned, reactivated, retention.recent_donors]

    colors = ['gray', 'red', 'green', 'black']

    bottoms = [
        0,
        prior,
        prior - churned,
        0
    ]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(categories, values, bottom=bottoms, color=colors, edgecolor='black')

    ax.set_title("Donor Retention Waterfall")
    ax.set_ylabel("Number of Donors")

    for i, (val, bot) in enumerate(zip(values, bottoms)):
        y_pos = bot + val / 2.0
        ax.text(i, y_pos, str(abs(val)), ha='center', va='center', color='white', fontweight='bold')

    return ax
