from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.constants import DEFAULT_POLL_SECONDS, STATUS_TABLE
from ..core.exceptions import StoreError
from ..status.model import TableFingerprint
from ..status.repository import StatusRepository
from .bus import ChangeBus

logger = logging.getLogger(__name__)


class StatusTablePoller:
    """Bridges writes made by other processes onto the local ChangeBus.

    Every ``interval`` seconds the status table fingerprint is compared with
    the previous one; any difference publishes a single change signal.
    """

    def __init__(self, statuses: StatusRepository, bus: ChangeBus, *, interval: float = DEFAULT_POLL_SECONDS):
        self._statuses = statuses
        self._bus = bus
        self._interval = float(interval)
        self._last: Optional[TableFingerprint] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> bool:
        """Check the table once; returns True when a change was published."""

        try:
            current = self._statuses.fingerprint()
        except StoreError as e:
            logger.warning("status poll failed: %s", e)
            return False

        previous, self._last = self._last, current
        if previous is None or previous == current:
            return False

        self._bus.publish(STATUS_TABLE)
        return True

    def _run(self) -> None:
        logger.info("status poller started (interval=%ss)", self._interval)
        while not self._stop.wait(self._interval):
            self.poll_once()
        logger.info("status poller stopped")

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._stop.clear()
            self.poll_once()
            self._thread = threading.Thread(target=self._run, name="status-poller", daemon=True)
            self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread, self._thread = self._thread, None
            self._stop.set()
        if thread is not None:
            thread.join(timeout)
