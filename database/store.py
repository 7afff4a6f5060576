'''
    File Name: store.py
    Version: 1.0.0
    Date: 18/01/2026
    Author: Pablo Bartolomé Molina
'''
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Union

from database.subscriptions import SnapshotListener, Subscription
from models.transaction import Transaction


class TransactionStore(ABC):
    """Contract every transaction backend implements.

    The store is the single source of truth. Every query is scoped to one
    owner, and subscribers receive the owner's full collection after each
    change. Failures surface as RemoteOperationFailed / RecordNotFound; the
    store never retries.
    """

    @abstractmethod
    def subscribe(self, owner_id: str, listener: SnapshotListener) -> Subscription:
        """Deliver the current snapshot to `listener` now and after every change."""

    @abstractmethod
    def snapshot(self, owner_id: str) -> List[Transaction]:
        """Return the owner's full current collection."""

    @abstractmethod
    def get(self, tx_id: str, owner_id: Optional[str] = None) -> Transaction:
        """Return one record or raise RecordNotFound (also when owned by someone other than `owner_id`)."""

    @abstractmethod
    def create(self, record: Union[Transaction, Mapping[str, Any]], owner_id: Optional[str] = None) -> str:
        """Validate and insert a record; return the new id."""

    @abstractmethod
    def update(self, tx_id: str, changes: Mapping[str, Any], owner_id: Optional[str] = None) -> None:
        """Apply `changes` to editable fields of an existing record."""

    @abstractmethod
    def delete(self, tx_id: str, owner_id: Optional[str] = None) -> None:
        """Remove a record permanently."""
