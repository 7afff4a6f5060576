'''
    File Name: transaction.py
    Version: 3.0.0
    Date: 12/01/2026
    Author: Pablo Bartolomé Molina
    Description: Transaction data model for the finance tracker.
'''
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional

import config
from models.errors import InvalidAmount, InvalidDate, ValidationError

# Fields the owner can never change once the store has assigned them
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})
EDITABLE_FIELDS = ("amount", "category", "type", "date", "notes")


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Transaction:
    """
    Represents a single income or expense entry owned by one user.

    Attributes:
        user_id: Owner identifier, never reassigned
        amount: Strictly positive magnitude; direction comes from `type`
        category: Category name (e.g., "Salary", "Food"); any string is accepted
        type: TransactionType.INCOME or TransactionType.EXPENSE
        date: Calendar date of the transaction
        notes: Optional free text
        id: Store-assigned identifier (None until created)
        created_at: Store-assigned creation timestamp (None until created)
    """
    user_id: str
    amount: Decimal
    category: str
    type: TransactionType
    date: date
    notes: str = ""
    id: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self):
        """Enforce record invariants after initialization."""
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite() or self.amount <= 0:
            raise InvalidAmount(f"Amount must be a positive number, got {self.amount!r}")
        if not isinstance(self.type, TransactionType):
            raise ValidationError(f"Invalid transaction type: {self.type!r}")
        if not isinstance(self.date, date) or isinstance(self.date, datetime):
            raise InvalidDate(f"Invalid date: {self.date!r}")

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    def with_changes(self, changes: Mapping[str, Any]) -> "Transaction":
        """Return a validated copy with `changes` applied to the editable fields."""
        check_changes(changes)
        merged = self.to_dict()
        merged.update(changes)
        edited = validate(merged)
        return replace(edited, id=self.id, user_id=self.user_id, created_at=self.created_at)

    def to_dict(self) -> dict:
        """Convert transaction to a plain dictionary (useful for DB and CSV rows)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "amount": str(self.amount),
            "category": self.category,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        """Create a Transaction from a stored row; any category string is kept as-is."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at) if created_at else None
        return cls(
            user_id=str(data.get("user_id", "")),
            amount=parse_amount(data.get("amount")),
            category=str(data.get("category") or config.DEFAULT_CATEGORY),
            type=parse_type(data.get("type")),
            date=parse_date(data.get("date")),
            notes=data.get("notes") or "",
            id=data.get("id"),
            created_at=created_at,
        )

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, type={self.type.value}, amount={self.amount}, "
            f"date={self.date.isoformat()}, category='{self.category}')"
        )


def parse_amount(value: Any) -> Decimal:
    """Parse a user-supplied amount into a positive Decimal or raise InvalidAmount."""
    if value is None or isinstance(value, bool):
        raise InvalidAmount("Please enter a valid amount")
    try:
        if isinstance(value, float):
            # go through str() so 0.1 stays 0.1 instead of its binary expansion
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"Please enter a valid amount: {value!r}")
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount(f"Amount must be greater than zero: {value!r}")
    return amount


def parse_date(value: Any) -> date:
    """Parse a calendar date from a date, datetime or ISO string, or raise InvalidDate."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDate("Date is required")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidDate(f"Invalid date format: {value}. Expected YYYY-MM-DD")


def parse_type(value: Any) -> TransactionType:
    if value is None or value == "":
        return TransactionType.EXPENSE
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Invalid transaction type: {value!r}. Expected 'income' or 'expense'")


def check_changes(changes: Mapping[str, Any]) -> None:
    """Validate a partial edit on its own, without the record it will apply to.

    Raises:
        ValidationError: immutable or unknown field, or invalid type
        InvalidAmount / InvalidDate: for an amount or date present in `changes`
    """
    forbidden = IMMUTABLE_FIELDS.intersection(changes)
    if forbidden:
        raise ValidationError(f"Fields cannot be modified: {', '.join(sorted(forbidden))}")
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    if "amount" in changes:
        parse_amount(changes["amount"])
    if "date" in changes:
        parse_date(changes["date"])
    if "type" in changes:
        parse_type(changes["type"])


def is_known_category(name: str) -> bool:
    return name in config.DEFAULT_CATEGORIES


def validate(candidate: Mapping[str, Any], owner_id: Optional[str] = None) -> Transaction:
    """Validate a candidate record before it is submitted for creation or update.

    Amount and date are checked first so that the caller gets InvalidAmount or
    InvalidDate before anything else. Category and notes are not checked
    against the default category list.

    Raises:
        InvalidAmount: amount missing, non-numeric or <= 0
        InvalidDate: date missing or unparsable
        ValidationError: unknown transaction type
    """
    amount = parse_amount(candidate.get("amount"))
    tx_date = parse_date(candidate.get("date"))
    tx_type = parse_type(candidate.get("type"))

    category = candidate.get("category")
    category = str(category).strip() if category is not None else ""
    notes = candidate.get("notes")

    return Transaction(
        user_id=str(owner_id if owner_id is not None else candidate.get("user_id") or ""),
        amount=amount,
        category=category or config.DEFAULT_CATEGORY,
        type=tx_type,
        date=tx_date,
        notes=str(notes) if notes is not None else "",
        id=candidate.get("id"),
    )
