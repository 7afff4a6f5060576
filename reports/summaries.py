'''
    File Name: summaries.py
    Version: 1.0.0
    Date: 15/01/2026
    Author: Pablo Bartolomé Molina
    Description: Per-screen views computed from one snapshot of transactions.
'''
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

import config
from models.transaction import Transaction
from reports import aggregation, filtering
from reports.aggregation import CategoryTotal, TimeSeriesPoint


@dataclass(frozen=True)
class DashboardSummary:
    """Totals, charts data and recent activity shown on the dashboard."""
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    categories: Tuple[CategoryTotal, ...]
    time_series: Tuple[TimeSeriesPoint, ...]
    recent: Tuple[Transaction, ...]

    @classmethod
    def from_records(cls, records: Iterable[Transaction], recent_limit: int = config.RECENT_LIMIT,
                     by_full_date: bool = False) -> "DashboardSummary":
        records = list(records)
        income = aggregation.total_income(records)
        expenses = aggregation.total_expenses(records)
        return cls(
            total_income=income,
            total_expenses=expenses,
            balance=income - expenses,
            categories=tuple(aggregation.category_breakdown(records)),
            time_series=tuple(aggregation.time_series(records, by_full_date=by_full_date)),
            recent=tuple(aggregation.recent(records, recent_limit)),
        )


@dataclass(frozen=True)
class TransactionListView:
    """Filtered, searched and sorted transaction list with its subtotals.

    Subtotals are taken from the filtered set before sorting.
    """
    items: Tuple[Transaction, ...]
    income: Decimal
    expenses: Decimal
    count: int

    @classmethod
    def from_records(cls, records: Iterable[Transaction], type_filter: str = "all",
                     query: Optional[str] = None, sort_key: str = "date") -> "TransactionListView":
        matched = filtering.search(filtering.filter_by_type(records, type_filter), query)
        return cls(
            items=tuple(filtering.sort_by(matched, sort_key)),
            income=aggregation.total_income(matched),
            expenses=aggregation.total_expenses(matched),
            count=len(matched),
        )


@dataclass(frozen=True)
class ProfileSummary:
    transaction_count: int
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    average_transaction: Decimal
    savings_rate: Decimal
    month_income: Decimal
    month_expenses: Decimal

    @classmethod
    def from_records(cls, records: Iterable[Transaction], today: Optional[date] = None) -> "ProfileSummary":
        records: List[Transaction] = list(records)
        today = today or date.today()
        income = aggregation.total_income(records)
        expenses = aggregation.total_expenses(records)
        month = aggregation.monthly_totals(records, today.year, today.month)
        return cls(
            transaction_count=len(records),
            total_income=income,
            total_expenses=expenses,
            balance=income - expenses,
            average_transaction=aggregation.average_amount(records),
            savings_rate=aggregation.savings_rate(records),
            month_income=month.income,
            month_expenses=month.expenses,
        )
