'''
    File Name: test_filtering.py
    Version: 1.0.0
    Date: 23/01/2026
    Author: Pablo Bartolomé Molina
'''
import pytest

from reports import filtering


@pytest.fixture
def records(make_tx):
    return [
        make_tx(40, "expense", "2024-01-03", "Food", "lunch"),
        make_tx(2000, "income", "2024-01-01", "Salary"),
        make_tx(15, "expense", "2024-01-05", "Transport", "bought food on the train"),
        make_tx(300, "income", "2024-01-02", "Freelance", "logo job"),
    ]


def test_filter_all_is_identity(records):
    assert filtering.filter_by_type(records, "all") == records


def test_filter_by_type(records):
    assert [r.category for r in filtering.filter_by_type(records, "income")] == ["Salary", "Freelance"]
    assert [r.category for r in filtering.filter_by_type(records, "expense")] == ["Food", "Transport"]


def test_filter_unknown_selector(records):
    with pytest.raises(ValueError):
        filtering.filter_by_type(records, "transfers")


def test_search_matches_category_or_notes_case_insensitively(records):
    found = filtering.search(records, "food")
    assert [r.category for r in found] == ["Food", "Transport"]
    assert [r.category for r in filtering.search(records, "LOGO")] == ["Freelance"]


@pytest.mark.parametrize("query", ["", None])
def test_empty_search_matches_everything(records, query):
    assert filtering.search(records, query) == records


def test_search_with_no_match(records):
    assert filtering.search(records, "rent") == []


def test_sort_by_date_newest_first(records):
    assert [r.date.day for r in filtering.sort_by(records, "date")] == [5, 3, 2, 1]


def test_sort_by_amount_descending(records):
    assert [int(r.amount) for r in filtering.sort_by(records, "amount")] == [2000, 300, 40, 15]


def test_sort_by_category_ascending(records):
    assert [r.category for r in filtering.sort_by(records, "category")] == [
        "Food", "Freelance", "Salary", "Transport"
    ]


def test_sort_by_category_ignores_case(make_tx):
    records = [make_tx(1, category="Banana"), make_tx(2, category="apple"), make_tx(3, category="cherry")]
    assert [r.category for r in filtering.sort_by(records, "category")] == ["apple", "Banana", "cherry"]


def test_sort_by_category_keeps_input_order_for_equal_names(make_tx):
    first = make_tx(1, category="Food", notes="first")
    second = make_tx(2, category="Food", notes="second")
    other = make_tx(3, category="Entertainment")
    assert filtering.sort_by([first, other, second], "category") == [other, first, second]
    assert filtering.sort_by([second, other, first], "category") == [other, second, first]


def test_sort_by_amount_is_stable(make_tx):
    first = make_tx(10, day="2024-01-01", notes="first")
    second = make_tx(10, day="2024-01-01", notes="second")
    assert filtering.sort_by([first, second], "amount") == [first, second]
    assert filtering.sort_by([second, first], "amount") == [second, first]


@pytest.mark.parametrize("key", filtering.SORT_KEYS)
def test_sort_is_idempotent(records, key):
    once = filtering.sort_by(records, key)
    assert filtering.sort_by(once, key) == once


def test_sort_does_not_mutate_input(records):
    before = list(records)
    filtering.sort_by(records, "amount")
    assert records == before


def test_sort_unknown_key(records):
    with pytest.raises(ValueError):
        filtering.sort_by(records, "notes")


def test_apply_filters_searches_then_sorts(records, make_tx):
    extra = make_tx(99, "income", "2024-01-09", "Investment", "food stocks")
    result = filtering.apply(records + [extra], type_filter="income", query="o", sort_key="amount")
    assert [r.category for r in result] == ["Freelance", "Investment"]
