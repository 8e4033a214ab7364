from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import date, datetime
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..absence.service import AbsenceSignal
from ..changes.channel import ChangeChannel, ChangeEvent, Subscription
from ..common.datetime_utils import now_utc, today_local
from ..core.constants import DEFAULT_RESET_NOTE, LOAD_ERROR_MESSAGE, STATUS_TABLE
from ..core.enums import PersonCategory
from ..core.exceptions import PersonNotLoadedError, StoreError, SubscriptionError
from ..roster.repository import RosterRepository
from ..status.model import PersonKey
from ..status.repository import StatusRepository
from .merge import merge_people
from .model import DrillStats, Person
from .stats import compute_stats, distinct_classes

logger = logging.getLogger(__name__)


class DrillBoard:
    """Client-side view model of the drill board.

    Owns the merged in-memory list of people and is its only writer.
    Mutations are applied to memory first, then written to the status
    store; a failed write is reverted by a full reload. Change signals
    are never parsed: each one triggers a full reload.

    Store and channel failures never escape the public operations; they
    resolve to a False result, an ``error`` message and a reload.
    """

    def __init__(
        self,
        roster: RosterRepository,
        statuses: StatusRepository,
        absences: AbsenceSignal,
        *,
        clock: Callable[[], datetime] = now_utc,
        today: Callable[[], date] = today_local,
    ):
        self._roster = roster
        self._statuses = statuses
        self._absences = absences
        self._clock = clock
        self._today = today

        self._lock = threading.Lock()
        self._people: List[Person] = []
        self._index: Dict[PersonKey, int] = {}
        self._load_seq = 0
        self._applied_seq = 0
        self._subscription: Optional[Subscription] = None
        self._disposed = False

        self.loading = True
        self.error: Optional[str] = None

    # -- state -------------------------------------------------------------

    @property
    def people(self) -> Tuple[Person, ...]:
        with self._lock:
            return tuple(self._people)

    @property
    def active(self) -> bool:
        return self._subscription is not None and not self._subscription.closed

    def get(self, person_id: int, category: PersonCategory) -> Optional[Person]:
        with self._lock:
            idx = self._index.get((int(person_id), category))
            return self._people[idx] if idx is not None else None

    def get_stats(self) -> DrillStats:
        return compute_stats(self.people)

    def get_classes(self) -> List[str]:
        return distinct_classes(self.people)

    # -- load --------------------------------------------------------------

    def _fetch(self) -> List[Person]:
        with ThreadPoolExecutor(max_workers=4, thread_name_prefix="drill-load") as pool:
            staff = pool.submit(self._roster.list_drill_staff)
            students = pool.submit(self._roster.list_students)
            statuses = pool.submit(self._statuses.list_all)
            absent = pool.submit(self._absences.absent_today)
            return merge_people(staff.result(), students.result(), statuses.result(), absent.result())

    def load(self) -> bool:
        """Fetch everything and replace the list wholesale.

        A load that finishes after a newer one, or after deactivate(), is
        discarded.
        """

        with self._lock:
            if self._disposed:
                return False
            self._load_seq += 1
            seq = self._load_seq

        try:
            people = self._fetch()
        except StoreError as e:
            logger.error("Error fetching people: %s", e)
            with self._lock:
                if self._disposed or seq < self._applied_seq:
                    logger.debug("ignoring failure of stale load #%s", seq)
                    return False
                self.error = LOAD_ERROR_MESSAGE
                self.loading = False
            return False

        with self._lock:
            if self._disposed or seq < self._applied_seq:
                logger.debug("discarding stale load #%s", seq)
                return False
            self._applied_seq = seq
            self._people = people
            self._index = {p.key: i for i, p in enumerate(people)}
            self.error = None
            self.loading = False
        return True

    refresh = load

    # -- mutations ---------------------------------------------------------

    def _patch(self, key: PersonKey, change: Callable[[Person], Person]) -> Person:
        with self._lock:
            idx = self._index.get(key)
            if idx is None:
                raise PersonNotLoadedError(f"{key[1].value}-{key[0]} is not on the board")
            updated = change(self._people[idx])
            self._people[idx] = updated
            return updated

    def _write(self, person: Person, *, now: datetime, action: str) -> bool:
        try:
            self._statuses.upsert(
                person_id=person.person_id,
                person_type=person.category,
                checked_in=person.checked_in,
                out_today=person.out_today,
                checked_in_at=person.checked_in_at,
                checked_in_by=person.checked_in_by,
                updated_at=now,
            )
        except StoreError as e:
            logger.error("Error toggling %s for %s-%s: %s", action, person.category.value, person.person_id, e)
            self.load()
            return False
        return True

    def toggle_check_in(self, person: Person, acting_user: str) -> bool:
        now = self._clock()
        updated = self._patch(
            person.key,
            lambda p: p.with_check_in(not p.checked_in, at=now, by=acting_user),
        )
        return self._write(updated, now=now, action="check-in")

    def toggle_out_today(self, person: Person) -> bool:
        now = self._clock()
        updated = self._patch(person.key, lambda p: p.with_out_today(not p.out_today))
        return self._write(updated, now=now, action="out-today")

    def reset_all(self, acting_user: str, *, notes: str = DEFAULT_RESET_NOTE) -> bool:
        """Clear every status record and append one history entry.

        Privilege is checked by the caller (AccessService.can_reset).
        """

        now = self._clock()
        try:
            count = self._statuses.reset_all(updated_at=now)
        except StoreError as e:
            logger.error("Error resetting: %s", e)
            return False

        ok = True
        try:
            self._statuses.append_history(drill_date=self._today(), reset_by=acting_user, notes=notes)
        except StoreError as e:
            logger.error("Reset applied but history entry failed: %s", e)
            ok = False

        logger.info("drill reset by %s (%s records)", acting_user, count)
        self.load()
        return ok

    # -- subscription lifecycle --------------------------------------------

    def _on_change(self, event: ChangeEvent) -> None:
        self.load()

    def activate(self, channel: ChangeChannel) -> bool:
        """Load, then subscribe to status table changes.

        Returns False when the channel could not be opened; the board still
        works on manual refresh.
        """

        with self._lock:
            if self._disposed:
                raise RuntimeError("board was deactivated")
            if self._subscription is not None:
                return True

        self.load()

        try:
            subscription = channel.subscribe(STATUS_TABLE, self._on_change)
        except SubscriptionError as e:
            logger.warning("change subscription failed, live updates disabled: %s", e)
            return False

        with self._lock:
            disposed = self._disposed
            duplicate = self._subscription is not None
            if not disposed and not duplicate:
                self._subscription = subscription
        if disposed or duplicate:
            subscription.close()
        return not disposed

    def deactivate(self) -> None:
        with self._lock:
            self._disposed = True
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.close()

    @contextmanager
    def activated(self, channel: ChangeChannel) -> Iterator["DrillBoard"]:
        self.activate(channel)
        try:
            yield self
        finally:
            self.deactivate()
