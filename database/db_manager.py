'''
    File Name: db_manager.py
    Version: 3.0.0
    Date: 20/01/2026
    Author: Pablo Bartolomé Molina
'''

import csv
import logging
import sqlite3
import uuid
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import config
from database.store import TransactionStore
from database.subscriptions import SnapshotHub, SnapshotListener, Subscription
from models.errors import InvalidImportFile, RecordNotFound, RemoteOperationFailed, ValidationError
from models.transaction import Transaction, check_changes, validate

logger = logging.getLogger(__name__)

COLUMNS = ("id", "user_id", "amount", "category", "type", "date", "notes", "created_at")
CSV_FIELDS = ["id", "amount", "category", "type", "date", "notes", "created_at"]


class DatabaseManager(TransactionStore):
    """SQLite-backed transaction store with in-process snapshot subscriptions."""

    def __init__(self, db_path: Path = None):
        # prefer explicit path, otherwise the configured one
        self.db_path = Path(db_path) if db_path is not None else Path(config.DATABASE_PATH)
        self._hub = SnapshotHub()

    def _connect(self) -> sqlite3.Connection:
        """Return a new sqlite3 connection to the configured DB path."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def ensure_database(self) -> None:
        """
        Ensure the configured SQLite database file exists and initialize schema.
        Safe to call multiple times.
        """
        logger.debug("Ensuring database exists at %s", self.db_path)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS transactions (
                        id TEXT PRIMARY KEY,
                        user_id TEXT NOT NULL,
                        amount TEXT NOT NULL,
                        category TEXT NOT NULL,
                        type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
                        date TEXT NOT NULL,
                        notes TEXT NOT NULL DEFAULT '',
                        created_at TEXT NOT NULL
                    );
                    """
                )
                conn.execute("CREATE INDEX IF NOT EXISTS ix_transactions_user ON transactions (user_id);")
        except sqlite3.Error as exc:
            logger.exception("Failed to create/initialize database at %s", self.db_path)
            raise RemoteOperationFailed(f"Could not initialize database: {exc}") from exc

    # --- Reads ---
    def snapshot(self, owner_id: str) -> List[Transaction]:
        """Return every transaction owned by `owner_id` in insertion order."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    f"SELECT {', '.join(COLUMNS)} FROM transactions WHERE user_id = ? ORDER BY rowid",
                    (owner_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed fetching transactions for owner %s", owner_id)
            raise RemoteOperationFailed(f"Could not load transactions: {exc}") from exc
        return [Transaction.from_dict(dict(r)) for r in rows]

    def get(self, tx_id: str, owner_id: Optional[str] = None) -> Transaction:
        """Return a single transaction or raise RecordNotFound.

        When `owner_id` is given, a record owned by someone else is reported
        as not found.
        """
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    f"SELECT {', '.join(COLUMNS)} FROM transactions WHERE id = ?",
                    (tx_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed fetching transaction by id %s", tx_id)
            raise RemoteOperationFailed(f"Could not load transaction: {exc}") from exc
        if row is None or (owner_id is not None and row["user_id"] != owner_id):
            raise RecordNotFound(tx_id)
        return Transaction.from_dict(dict(row))

    def fetch_categories(self, owner_id: str) -> List[str]:
        """Distinct category names the owner has used, sorted."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(
                    "SELECT DISTINCT category FROM transactions WHERE user_id = ? ORDER BY category",
                    (owner_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed fetching categories for owner %s", owner_id)
            raise RemoteOperationFailed(f"Could not load categories: {exc}") from exc
        return [r[0] for r in rows]

    # --- Subscriptions ---
    def subscribe(self, owner_id: str, listener: SnapshotListener) -> Subscription:
        """Register `listener` for `owner_id` and deliver the current snapshot immediately."""
        current = self.snapshot(owner_id)
        sub = self._hub.add(owner_id, listener)
        self._hub.deliver(sub, current)
        return sub

    def _publish(self, owner_id: str) -> None:
        if not self._hub.has_listeners(owner_id):
            return
        try:
            current = self.snapshot(owner_id)
        except RemoteOperationFailed:
            # the write is already committed; listeners catch up on the next change
            logger.exception("Could not publish snapshot for owner %s", owner_id)
            return
        self._hub.publish(owner_id, current)

    # --- Transaction CRUD ---
    def _prepare(self, record: Union[Transaction, Mapping[str, Any]], owner_id: Optional[str]) -> Transaction:
        data = record.to_dict() if isinstance(record, Transaction) else record
        tx = validate(data, owner_id=owner_id)
        if not tx.user_id:
            raise ValidationError("Transaction owner is required")
        return Transaction(
            user_id=tx.user_id,
            amount=tx.amount,
            category=tx.category,
            type=tx.type,
            date=tx.date,
            notes=tx.notes,
            id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
        )

    @staticmethod
    def _insert(conn: sqlite3.Connection, tx: Transaction) -> None:
        row = tx.to_dict()
        conn.execute(
            f"INSERT INTO transactions ({', '.join(COLUMNS)}) VALUES ({', '.join('?' * len(COLUMNS))})",
            tuple(row[c] for c in COLUMNS),
        )

    def create(self, record: Union[Transaction, Mapping[str, Any]], owner_id: Optional[str] = None) -> str:
        """Validate and insert a new transaction. Returns the store-assigned id.

        Validation errors are raised before the database is touched.
        """
        tx = self._prepare(record, owner_id)
        try:
            with closing(self._connect()) as conn, conn:
                self._insert(conn, tx)
        except sqlite3.Error as exc:
            logger.exception("Failed adding transaction %r", tx)
            raise RemoteOperationFailed(f"Failed to add transaction: {exc}") from exc
        logger.info("Created transaction %s for owner %s", tx.id, tx.user_id)
        self._publish(tx.user_id)
        return tx.id

    def update(self, tx_id: str, changes: Mapping[str, Any], owner_id: Optional[str] = None) -> None:
        """Update editable fields of an existing transaction.

        Raises ValidationError for immutable fields or invalid values (checked
        before the database is read) and RecordNotFound when the target is
        gone or belongs to another owner.
        """
        check_changes(changes)
        current = self.get(tx_id, owner_id)
        edited = current.with_changes(changes)
        row = edited.to_dict()
        try:
            with closing(self._connect()) as conn, conn:
                cur = conn.execute(
                    "UPDATE transactions SET amount = ?, category = ?, type = ?, date = ?, notes = ? WHERE id = ?",
                    (row["amount"], row["category"], row["type"], row["date"], row["notes"], tx_id),
                )
                affected = cur.rowcount
        except sqlite3.Error as exc:
            logger.exception("Failed updating transaction %s", tx_id)
            raise RemoteOperationFailed(f"Failed to update transaction: {exc}") from exc
        if affected == 0:
            raise RecordNotFound(tx_id)
        logger.info("Updated transaction %s", tx_id)
        self._publish(current.user_id)

    def delete(self, tx_id: str, owner_id: Optional[str] = None) -> None:
        """Delete transaction by id. Irreversible."""
        current = self.get(tx_id, owner_id)
        try:
            with closing(self._connect()) as conn, conn:
                affected = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,)).rowcount
        except sqlite3.Error as exc:
            logger.exception("Failed deleting transaction id=%s", tx_id)
            raise RemoteOperationFailed(f"Failed to delete transaction: {exc}") from exc
        if affected == 0:
            raise RecordNotFound(tx_id)
        logger.info("Deleted transaction %s", tx_id)
        self._publish(current.user_id)

    # --- Import / Export helpers ---
    def export_to_csv(self, owner_id: str, path: Path) -> int:
        """Export the owner's transactions to a CSV file at `path`. Returns the row count."""
        rows = self.snapshot(owner_id)
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction="ignore")
            writer.writeheader()
            for tx in rows:
                writer.writerow(tx.to_dict())
        logger.info("Exported %d transactions to %s", len(rows), path)
        return len(rows)

    def import_from_csv(self, owner_id: str, path: Path) -> int:
        """Import transactions from a CSV file for `owner_id`. Returns number of imported rows.

        Rows that fail validation are skipped; ids and timestamps in the file
        are ignored and reassigned.
        """
        prepared: List[Transaction] = []
        try:
            with open(path, newline="", encoding="utf-8") as f:
                for line_no, row in enumerate(csv.DictReader(f), start=2):
                    candidate = {
                        "amount": row.get("amount"),
                        "category": row.get("category") or row.get("cat"),
                        "type": row.get("type"),
                        "date": row.get("date") or row.get("datetime"),
                        "notes": row.get("notes") or row.get("description") or "",
                    }
                    try:
                        prepared.append(self._prepare(candidate, owner_id))
                    except ValidationError as exc:
                        logger.warning("Skipping %s line %d: %s", path, line_no, exc)
        except (UnicodeDecodeError, csv.Error) as exc:
            logger.exception("Could not read CSV %s", path)
            raise InvalidImportFile(f"Could not read {path} as UTF-8 CSV: {exc}") from exc

        if not prepared:
            return 0
        try:
            with closing(self._connect()) as conn, conn:
                for tx in prepared:
                    self._insert(conn, tx)
        except sqlite3.Error as exc:
            logger.exception("Failed importing transactions from CSV %s", path)
            raise RemoteOperationFailed(f"Failed to import transactions: {exc}") from exc
        logger.info("Imported %d transactions from %s", len(prepared), path)
        self._publish(owner_id)
        return len(prepared)
