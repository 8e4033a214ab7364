from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceMark


class AbsenceRepository(Protocol):
    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceMark]:
        raise NotImplementedError
