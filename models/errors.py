'''
    File Name: errors.py
    Version: 1.0.0
    Date: 12/01/2026
    Author: Pablo Bartolomé Molina
    Description: Exceptions raised by the finance tracker.
'''
from typing import Optional


class FinanceTrackerError(Exception):
    """Base class for every recoverable error raised by the tracker."""


class ValidationError(FinanceTrackerError, ValueError):
    """A candidate transaction was rejected before reaching the store."""


class InvalidAmount(ValidationError):
    """Amount is missing, non-numeric or not strictly positive."""


class InvalidDate(ValidationError):
    """Date is missing or cannot be parsed as YYYY-MM-DD."""


class RemoteOperationFailed(FinanceTrackerError):
    """The backing store failed a create/update/delete/subscribe call."""


class RecordNotFound(FinanceTrackerError):
    """The edit or delete target does not exist."""

    def __init__(self, tx_id: Optional[str]):
        super().__init__(f"Transaction not found: {tx_id}")
        self.tx_id = tx_id


class InvalidImportFile(FinanceTrackerError):
    """An import file is not UTF-8 CSV."""
