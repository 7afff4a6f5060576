'''
    File Name: aggregation.py
    Version: 1.0.0
    Date: 14/01/2026
    Author: Pablo Bartolomé Molina
    Description: Totals, category breakdown and time series over a snapshot.
'''
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Sequence

import config
from models.transaction import Transaction, TransactionType

ZERO = Decimal("0")

# Fixed English abbreviations so labels do not depend on the process locale
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class CategoryTotal(NamedTuple):
    category: str
    total: Decimal


class TimeSeriesPoint(NamedTuple):
    label: str
    income: Decimal
    expenses: Decimal


class MonthlyTotals(NamedTuple):
    income: Decimal
    expenses: Decimal


def total_by_type(records: Iterable[Transaction], tx_type: TransactionType) -> Decimal:
    """Sum of amounts over records of the given type; 0 for an empty collection."""
    tx_type = TransactionType(tx_type)
    return sum((r.amount for r in records if r.type is tx_type), ZERO)


def total_income(records: Iterable[Transaction]) -> Decimal:
    return total_by_type(records, TransactionType.INCOME)


def total_expenses(records: Iterable[Transaction]) -> Decimal:
    return total_by_type(records, TransactionType.EXPENSE)


def balance(records: Sequence[Transaction]) -> Decimal:
    return total_income(records) - total_expenses(records)


def category_breakdown(records: Iterable[Transaction]) -> List[CategoryTotal]:
    """Per-category expense totals.

    Categories are grouped by exact string (no case folding). Entries come out
    in order of first occurrence; callers that care about order should sort.
    Income records never contribute.
    """
    totals: Dict[str, Decimal] = {}
    for r in records:
        if not r.is_expense:
            continue
        totals[r.category] = totals.get(r.category, ZERO) + r.amount
    return [CategoryTotal(name, total) for name, total in totals.items()]


def date_label(value, by_full_date: bool = False) -> str:
    """Bucket label for a date: "Jan 1" by default, ISO date when `by_full_date`."""
    if by_full_date:
        return value.isoformat()
    return f"{MONTH_ABBR[value.month - 1]} {value.day}"


def time_series(records: Iterable[Transaction], by_full_date: bool = False) -> List[TimeSeriesPoint]:
    """Per-day income and expense sums in ascending date order.

    Labels carry month and day only, so the same day in two different years
    lands in one bucket. Pass `by_full_date=True` to keep years apart.
    """
    buckets: Dict[str, List[Decimal]] = {}
    for r in sorted(records, key=lambda r: r.date):
        label = date_label(r.date, by_full_date)
        sums = buckets.setdefault(label, [ZERO, ZERO])
        if r.is_income:
            sums[0] += r.amount
        else:
            sums[1] += r.amount
    return [TimeSeriesPoint(label, income, expenses) for label, (income, expenses) in buckets.items()]


def recent(records: Iterable[Transaction], n: int = config.RECENT_LIMIT) -> List[Transaction]:
    """Most recent `n` records, newest first; same-day records keep input order."""
    if n <= 0:
        return []
    return sorted(records, key=lambda r: r.date, reverse=True)[:n]


def monthly_totals(records: Iterable[Transaction], year: int, month: int) -> MonthlyTotals:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")
    in_month = [r for r in records if r.date.year == year and r.date.month == month]
    return MonthlyTotals(total_income(in_month), total_expenses(in_month))


def average_amount(records: Sequence[Transaction]) -> Decimal:
    """Mean magnitude over all records regardless of type; 0 when empty."""
    count = len(records)
    if count == 0:
        return ZERO
    return (total_income(records) + total_expenses(records)) / count


def savings_rate(records: Sequence[Transaction]) -> Decimal:
    """Percentage of income not spent; 0 when there is no income."""
    income = total_income(records)
    if income <= 0:
        return ZERO
    return (income - total_expenses(records)) / income * 100
