from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..core.enums import ChangeKind


@dataclass(frozen=True)
class ChangeEvent:
    """"Something changed" signal. Carries no row data and is never trusted."""

    table: str
    kind: ChangeKind = ChangeKind.UNKNOWN


ChangeHandler = Callable[[ChangeEvent], None]


class Subscription:
    """Owned handle for one live subscription.

    close() tears the subscription down exactly once; later calls are no-ops.
    """

    def __init__(self, table: str, on_close: Optional[Callable[[], None]] = None):
        self.table = table
        self._on_close = on_close
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> bool:
        with self._lock:
            if self._closed:
                return False
            self._closed = True
            on_close, self._on_close = self._on_close, None
        if on_close is not None:
            on_close()
        return True

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ChangeChannel(Protocol):
    def subscribe(self, table: str, handler: ChangeHandler) -> Subscription:
        """Raises SubscriptionError when the stream cannot be opened."""

        raise NotImplementedError
