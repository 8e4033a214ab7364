from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Dict, List, Tuple

from ..core.enums import ChangeKind
from ..core.exceptions import SubscriptionError
from .channel import ChangeChannel, ChangeEvent, ChangeHandler, Subscription

logger = logging.getLogger(__name__)


class ChangeBus(ChangeChannel):
    """In-process fan-out of change signals, scoped by table name.

    Delivery is fire-and-forget: a failing handler is logged and the
    remaining handlers still run.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._handlers: Dict[str, List[Tuple[int, ChangeHandler]]] = defaultdict(list)
        self._next_token = 0
        self._closed = False

    def subscribe(self, table: str, handler: ChangeHandler) -> Subscription:
        with self._lock:
            if self._closed:
                raise SubscriptionError("change bus is closed")
            self._next_token += 1
            token = self._next_token
            self._handlers[table].append((token, handler))

        logger.debug("subscribed to %s (token=%s)", table, token)
        return Subscription(table, on_close=lambda: self._remove(table, token))

    def _remove(self, table: str, token: int) -> None:
        with self._lock:
            self._handlers[table] = [(t, h) for t, h in self._handlers[table] if t != token]
        logger.debug("unsubscribed from %s (token=%s)", table, token)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._handlers.get(table, []))

    def publish(self, table: str, kind: ChangeKind = ChangeKind.UNKNOWN) -> int:
        """Deliver one signal to every subscriber of ``table``; returns how many were called."""

        with self._lock:
            handlers = [h for _, h in self._handlers.get(table, [])]

        event = ChangeEvent(table=table, kind=kind)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("change handler failed for %s", table)
        return len(handlers)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._handlers.clear()
