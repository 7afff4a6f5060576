'''
    File Name: charts.py
    Version: 2.0.0
    Date: 16/01/2026
    Author: Pablo Bartolomé Molina
'''
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pandas as pd
from matplotlib.figure import Figure

import config
from models.transaction import Transaction
from reports.aggregation import CategoryTotal, TimeSeriesPoint
from reports.summaries import DashboardSummary

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No transactions available\nAdd transactions to see statistics"


def time_series_frame(points: Sequence[TimeSeriesPoint]) -> pd.DataFrame:
    """DataFrame with columns label/income/expenses, one row per bucket, in bucket order."""
    return pd.DataFrame(
        [(p.label, float(p.income), float(p.expenses)) for p in points],
        columns=["label", "income", "expenses"],
    )


def category_frame(totals: Sequence[CategoryTotal]) -> pd.DataFrame:
    return pd.DataFrame(
        [(t.category, float(t.total)) for t in totals],
        columns=["category", "total"],
    )


def _draw_empty(ax) -> None:
    ax.text(0.5, 0.5, EMPTY_MESSAGE, ha="center", va="center", fontsize=12, color="#666666")
    ax.set_xticks([])
    ax.set_yticks([])


def draw_time_series(ax, points: Sequence[TimeSeriesPoint]) -> None:
    """Income vs expenses lines on `ax`."""
    df = time_series_frame(points)
    if df.empty:
        _draw_empty(ax)
        return
    x = range(len(df))
    ax.plot(x, df["income"], marker="o", linewidth=2, color=config.INCOME_COLOR, label="income")
    ax.plot(x, df["expenses"], marker="o", linewidth=2, color=config.EXPENSE_COLOR, label="expenses")
    ax.set_xticks(list(x))
    ax.set_xticklabels(df["label"], rotation=45, ha="right")
    ax.set_ylabel(f"Amount ({config.DEFAULT_CURRENCY})")
    ax.set_title("Income vs Expenses")
    ax.grid(alpha=0.3)
    ax.legend()


def draw_category_breakdown(ax, totals: Sequence[CategoryTotal]) -> None:
    """Expense pie; slice colors cycle through CHART_COLORS by index."""
    df = category_frame(totals)
    if df.empty:
        _draw_empty(ax)
        return
    colors = [config.CHART_COLORS[i % len(config.CHART_COLORS)] for i in range(len(df))]
    labels = [f"{name}: {value:,.0f}" for name, value in zip(df["category"], df["total"])]
    ax.pie(df["total"], labels=labels, colors=colors)
    ax.set_title("Spending by Category")


def plot_time_series(points: Sequence[TimeSeriesPoint]) -> Figure:
    fig = Figure(figsize=(10, 6), dpi=100)
    draw_time_series(fig.add_subplot(111), points)
    return fig


def plot_category_breakdown(totals: Sequence[CategoryTotal]) -> Figure:
    fig = Figure(figsize=(8, 8), dpi=100)
    draw_category_breakdown(fig.add_subplot(111), totals)
    return fig


def plot_dashboard(summary: DashboardSummary) -> Figure:
    """Both dashboard charts side by side."""
    fig = Figure(figsize=(14, 6), dpi=100)
    draw_time_series(fig.add_subplot(1, 2, 1), summary.time_series)
    draw_category_breakdown(fig.add_subplot(1, 2, 2), summary.categories)
    fig.tight_layout()
    return fig


def save_dashboard(records: Iterable[Transaction], path: Path,
                   summary: Optional[DashboardSummary] = None) -> Path:
    """Render the dashboard charts for `records` into an image file at `path`."""
    summary = summary or DashboardSummary.from_records(records)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_dashboard(summary)
    fig.savefig(path)
    logger.debug("Saved dashboard chart to %s", path)
    return path
