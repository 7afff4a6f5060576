'''
    File Name: conftest.py
    Version: 1.0.0
    Date: 22/01/2026
    Author: Pablo Bartolomé Molina
'''
from datetime import date
from decimal import Decimal

import pytest

from database.db_manager import DatabaseManager
from models.transaction import Transaction, TransactionType


@pytest.fixture
def make_tx():
    """Factory for in-memory transactions; ids count up so tests can tell them apart."""
    counter = {"n": 0}

    def _make(amount, tx_type="expense", day="2024-01-01", category="Food", notes="", user_id="alice"):
        counter["n"] += 1
        return Transaction(
            user_id=user_id,
            amount=Decimal(str(amount)),
            category=category,
            type=TransactionType(tx_type),
            date=date.fromisoformat(day),
            notes=notes,
            id=f"tx{counter['n']}",
        )

    return _make


@pytest.fixture
def db(tmp_path):
    dm = DatabaseManager(tmp_path / "test.db")
    dm.ensure_database()
    return dm
