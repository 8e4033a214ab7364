from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceMark:
    """One row of the school attendance feed (master_attendance)."""

    person_id: int
    attendance_date: date
    attendance_category: int
