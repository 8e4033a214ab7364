from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import PersonCategory

PersonKey = Tuple[int, PersonCategory]


@dataclass(frozen=True)
class StatusRecord:
    """Persisted drill state for one person, keyed by (person_id, person_type)."""

    person_id: int
    person_type: PersonCategory
    checked_in: bool = False
    out_today: bool = False
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> PersonKey:
        return (self.person_id, self.person_type)


@dataclass(frozen=True)
class DrillHistoryEntry:
    """Append-only audit row written by a bulk reset."""

    drill_date: date
    reset_by: str
    notes: Optional[str] = None
    history_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TableFingerprint:
    """Change detector for the status table.

    ``write_total`` sums a per-row counter bumped by every write, so an update
    landing on the same timestamp as the previous latest write still changes
    the fingerprint.
    """

    row_count: int
    last_updated_at: Optional[datetime]
    write_total: int = 0
