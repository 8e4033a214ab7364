from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import HISTORY_TABLE, STATUS_TABLE
from ..core.enums import ChangeKind, PersonCategory
from ..status.model import DrillHistoryEntry, StatusRecord, TableFingerprint
from ..status.repository import StatusRepository
from .bus import ChangeBus


class NotifyingStatusRepository(StatusRepository):
    """Decorator: publishes a change signal after every successful write.

    Failed writes raise before publishing, so subscribers only ever refetch
    after the store accepted something.
    """

    def __init__(self, inner: StatusRepository, bus: ChangeBus):
        self._inner = inner
        self._bus = bus

    def list_all(self) -> Sequence[StatusRecord]:
        return self._inner.list_all()

    def upsert(
        self,
        *,
        person_id: int,
        person_type: PersonCategory,
        checked_in: bool,
        out_today: bool,
        checked_in_at: Optional[datetime],
        checked_in_by: Optional[str],
        updated_at: datetime,
    ) -> None:
        self._inner.upsert(
            person_id=person_id,
            person_type=person_type,
            checked_in=checked_in,
            out_today=out_today,
            checked_in_at=checked_in_at,
            checked_in_by=checked_in_by,
            updated_at=updated_at,
        )
        self._bus.publish(STATUS_TABLE, ChangeKind.UPDATE)

    def reset_all(self, *, updated_at: datetime) -> int:
        count = self._inner.reset_all(updated_at=updated_at)
        self._bus.publish(STATUS_TABLE, ChangeKind.UPDATE)
        return count

    def append_history(self, *, drill_date: date, reset_by: str, notes: Optional[str] = None) -> int:
        history_id = self._inner.append_history(drill_date=drill_date, reset_by=reset_by, notes=notes)
        self._bus.publish(HISTORY_TABLE, ChangeKind.INSERT)
        return history_id

    def list_history(self, *, limit: int = 20) -> Sequence[DrillHistoryEntry]:
        return self._inner.list_history(limit=limit)

    def fingerprint(self) -> TableFingerprint:
        return self._inner.fingerprint()
