'''
    File Name: subscriptions.py
    Version: 1.0.0
    Date: 18/01/2026
    Author: Pablo Bartolomé Molina
'''
import logging
from typing import Callable, Dict, List, Optional

from models.transaction import Transaction

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[List[Transaction]], None]


class Subscription:
    """Handle returned by `subscribe()`. Call `unsubscribe()` (or leave the
    `with` block) to stop receiving snapshots."""

    def __init__(self, hub: "SnapshotHub", owner_id: str, listener: SnapshotListener):
        self._hub: Optional[SnapshotHub] = hub
        self.owner_id = owner_id
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._hub is not None

    def unsubscribe(self) -> None:
        """Stop delivery and drop the listener. Safe to call more than once."""
        if self._hub is None:
            return
        self._hub.remove(self)
        self._hub = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class SnapshotHub:
    """Per-owner listener registry. Delivery is synchronous on the caller's thread."""

    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def add(self, owner_id: str, listener: SnapshotListener) -> Subscription:
        sub = Subscription(self, owner_id, listener)
        self._subscriptions.setdefault(owner_id, []).append(sub)
        logger.debug("Subscribed listener for owner %s", owner_id)
        return sub

    def remove(self, sub: Subscription) -> None:
        subs = self._subscriptions.get(sub.owner_id, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._subscriptions.pop(sub.owner_id, None)
        logger.debug("Unsubscribed listener for owner %s", sub.owner_id)

    def has_listeners(self, owner_id: str) -> bool:
        return bool(self._subscriptions.get(owner_id))

    def count(self, owner_id: Optional[str] = None) -> int:
        if owner_id is not None:
            return len(self._subscriptions.get(owner_id, []))
        return sum(len(s) for s in self._subscriptions.values())

    def deliver(self, sub: Subscription, snapshot: List[Transaction]) -> None:
        """Send one snapshot to one subscriber; a failing listener is logged, not raised."""
        try:
            sub.listener(list(snapshot))
        except Exception:
            logger.exception("Snapshot listener failed for owner %s", sub.owner_id)

    def publish(self, owner_id: str, snapshot: List[Transaction]) -> None:
        # copy: listeners may unsubscribe while being notified
        for sub in list(self._subscriptions.get(owner_id, [])):
            if sub.active:
                self.deliver(sub, snapshot)
