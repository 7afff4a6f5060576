'''
    File Name: filtering.py
    Version: 1.0.0
    Date: 14/01/2026
    Author: Pablo Bartolomé Molina
    Description: Filter / search / sort helpers for the transaction list.
'''
import locale
from typing import Iterable, List, Optional

from models.transaction import Transaction, TransactionType

TYPE_FILTERS = ("all", "income", "expense")
SORT_KEYS = ("date", "amount", "category")


def filter_by_type(records: Iterable[Transaction], selector: str = "all") -> List[Transaction]:
    """Keep records of the selected type; "all" returns every record unchanged."""
    if selector not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter: {selector!r}. Expected one of {TYPE_FILTERS}")
    if selector == "all":
        return list(records)
    wanted = TransactionType(selector)
    return [r for r in records if r.type is wanted]


def search(records: Iterable[Transaction], query: Optional[str] = None) -> List[Transaction]:
    """Case-insensitive substring match on category or notes.

    An empty or missing query matches everything.
    """
    needle = (query or "").lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if needle in (r.category or "").lower() or needle in (r.notes or "").lower()
    ]


def _category_key(record: Transaction):
    name = record.category or ""
    return locale.strxfrm(name.casefold()), locale.strxfrm(name)


def sort_by(records: Iterable[Transaction], key: str = "date") -> List[Transaction]:
    """Return a new list ordered by `key`.

    date: newest first; amount: largest first; category: ascending by the
    current collation locale, ignoring case first ("apple" before "Banana")
    and using exact case only to separate otherwise equal names. Equal keys
    keep their input order, reverse=True included.
    """
    if key == "date":
        return sorted(records, key=lambda r: r.date, reverse=True)
    if key == "amount":
        return sorted(records, key=lambda r: r.amount, reverse=True)
    if key == "category":
        return sorted(records, key=_category_key)
    raise ValueError(f"Unknown sort key: {key!r}. Expected one of {SORT_KEYS}")


def apply(records: Iterable[Transaction], type_filter: str = "all", query: Optional[str] = None,
          sort_key: str = "date") -> List[Transaction]:
    """Full list pipeline: type filter, then search, then sort."""
    return sort_by(search(filter_by_type(records, type_filter), query), sort_key)
