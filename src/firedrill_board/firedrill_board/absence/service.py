from __future__ import annotations

from datetime import date
from typing import Callable, FrozenSet, Iterable

from ..common.datetime_utils import today_local
from ..core.constants import ABSENT_CATEGORY
from .model import AttendanceMark
from .repository import AbsenceRepository


def absent_ids(marks: Iterable[AttendanceMark], *, absent_category: int = ABSENT_CATEGORY) -> FrozenSet[int]:
    """Person ids marked absent; every other category code is ignored."""

    return frozenset(m.person_id for m in marks if int(m.attendance_category) == absent_category)


class AbsenceSignal:
    """Same-day, read-only view of the external attendance feed.

    Informational only: it drives a warning flag, never a drill status.
    """

    def __init__(self, marks: AbsenceRepository, *, today: Callable[[], date] = today_local):
        self._marks = marks
        self._today = today

    def absent_today(self) -> FrozenSet[int]:
        return absent_ids(self._marks.list_for_date(self._today()))
