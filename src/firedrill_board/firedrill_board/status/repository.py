from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PersonCategory
from .model import DrillHistoryEntry, StatusRecord, TableFingerprint


class StatusRepository(Protocol):
    """Durable status table plus its append-only history.

    All writes are idempotent: upsert is keyed by (person_id, person_type),
    so concurrent writers resolve to last-write-wins without locking.
    """

    def list_all(self) -> Sequence[StatusRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

    def reset_all(self, *, updated_at: datetime) -> int:
        """Clear every record; returns the number of rows touched."""

        raise NotImplementedError

    def append_history(self, *, drill_date: date, reset_by: str, notes: Optional[str] = None) -> int:
        raise NotImplementedError

    def list_history(self, *, limit: int = 20) -> Sequence[DrillHistoryEntry]:
        raise NotImplementedError

    def fingerprint(self) -> TableFingerprint:
        raise NotImplementedError
