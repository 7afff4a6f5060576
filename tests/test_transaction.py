'''
    File Name: test_transaction.py
    Version: 1.0.0
    Date: 22/01/2026
    Author: Pablo Bartolomé Molina
'''
from datetime import date, datetime
from decimal import Decimal

import pytest

from models.errors import InvalidAmount, InvalidDate, ValidationError
from models.transaction import Transaction, TransactionType, is_known_category, validate


def test_validate_returns_record():
    tx = validate({"amount": "12.50", "date": "2024-03-05", "type": "income", "category": "Salary",
                   "notes": "march"}, owner_id="alice")
    assert tx.amount == Decimal("12.50")
    assert tx.date == date(2024, 3, 5)
    assert tx.type is TransactionType.INCOME
    assert tx.user_id == "alice"
    assert tx.notes == "march"
    assert tx.id is None


@pytest.mark.parametrize("amount", [0, -5, "0", "abc", None, "", True, float("nan"), "Infinity"])
def test_validate_rejects_bad_amount(amount):
    with pytest.raises(InvalidAmount):
        validate({"amount": amount, "date": "2024-01-01"})


def test_validate_zero_amount_is_invalid_amount():
    with pytest.raises(InvalidAmount):
        validate({"amount": 0, "date": "2024-01-01"})


def test_validate_empty_date_is_invalid_date():
    with pytest.raises(InvalidDate):
        validate({"amount": 10, "date": ""})


@pytest.mark.parametrize("value", [None, "not-a-date", "2024-13-01", 20240101])
def test_validate_rejects_bad_date(value):
    with pytest.raises(InvalidDate):
        validate({"amount": 10, "date": value})


def test_validate_accepts_date_objects_and_timestamps():
    assert validate({"amount": 1, "date": date(2024, 2, 29)}).date == date(2024, 2, 29)
    assert validate({"amount": 1, "date": datetime(2024, 2, 29, 13, 5)}).date == date(2024, 2, 29)
    assert validate({"amount": 1, "date": "2024-02-29T13:05:00"}).date == date(2024, 2, 29)


def test_float_amount_keeps_decimal_value():
    assert validate({"amount": 0.1, "date": "2024-01-01"}).amount == Decimal("0.1")


def test_category_is_not_restricted():
    tx = validate({"amount": 5, "date": "2024-01-01", "category": "Pets"})
    assert tx.category == "Pets"
    assert not is_known_category("Pets")
    assert is_known_category("Food")


def test_defaults_for_type_category_and_notes():
    tx = validate({"amount": 5, "date": "2024-01-01"})
    assert tx.type is TransactionType.EXPENSE
    assert tx.category == "Other"
    assert tx.notes == ""


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        validate({"amount": 5, "date": "2024-01-01", "type": "transfer"})


def test_validation_errors_are_value_errors():
    # callers that only know about ValueError still catch them
    with pytest.raises(ValueError):
        validate({"amount": -1, "date": "2024-01-01"})


def test_constructor_enforces_positive_amount():
    with pytest.raises(InvalidAmount):
        Transaction(user_id="a", amount=Decimal("0"), category="Food",
                    type=TransactionType.EXPENSE, date=date(2024, 1, 1))


def test_dict_round_trip_keeps_every_field():
    tx = Transaction(user_id="a", amount=Decimal("3.30"), category="Food", type=TransactionType.EXPENSE,
                     date=date(2024, 1, 1), notes="lunch", id="x1", created_at=datetime(2024, 1, 1, 9, 30))
    again = Transaction.from_dict(tx.to_dict())
    assert again == tx
    assert again.created_at == tx.created_at
    assert again.amount == Decimal("3.30")


def test_with_changes_keeps_identity_fields(make_tx):
    tx = make_tx(10, notes="old")
    edited = tx.with_changes({"amount": "15", "notes": "new", "type": "income"})
    assert edited.amount == Decimal("15")
    assert edited.notes == "new"
    assert edited.is_income
    assert (edited.id, edited.user_id) == (tx.id, tx.user_id)


@pytest.mark.parametrize("field", ["id", "user_id", "created_at"])
def test_with_changes_rejects_immutable_fields(make_tx, field):
    with pytest.raises(ValidationError):
        make_tx(10).with_changes({field: "other"})


def test_with_changes_revalidates(make_tx):
    with pytest.raises(InvalidAmount):
        make_tx(10).with_changes({"amount": 0})
