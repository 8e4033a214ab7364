from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import PersonCategory
from ..status.model import PersonKey


@dataclass(frozen=True)
class Person:
    """One row of the board: a roster person joined with drill status.

    Tagged by ``category``; ``grade_level`` only exists for students and
    ``class_name`` holds the staff sentinel for staff.
    """

    person_id: int
    category: PersonCategory
    first_name: str
    last_name: str
    full_name: str
    class_name: Optional[str]
    grade_level: Optional[int] = None
    checked_in: bool = False
    out_today: bool = False
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    vc_absent: bool = False

    @property
    def key(self) -> PersonKey:
        return (self.person_id, self.category)

    @property
    def is_staff(self) -> bool:
        return self.category == PersonCategory.STAFF

    @property
    def accounted_for(self) -> bool:
        return self.checked_in or self.out_today

    def with_check_in(self, checked_in: bool, *, at: Optional[datetime], by: Optional[str]) -> "Person":
        if checked_in:
            return replace(self, checked_in=True, out_today=False, checked_in_at=at, checked_in_by=by)
        return replace(self, checked_in=False, checked_in_at=None, checked_in_by=None)

    def with_out_today(self, out_today: bool) -> "Person":
        if out_today:
            return replace(self, out_today=True, checked_in=False, checked_in_at=None, checked_in_by=None)
        return replace(self, out_today=False)


@dataclass(frozen=True)
class DrillStats:
    total_staff: int = 0
    staff_checked_in: int = 0
    staff_out: int = 0
    staff_vc_absent: int = 0
    total_students: int = 0
    students_checked_in: int = 0
    students_out: int = 0
    students_vc_absent: int = 0
    overall_percent: int = 0

    @property
    def total_people(self) -> int:
        return self.total_staff + self.total_students

    @property
    def total_checked_in(self) -> int:
        return self.staff_checked_in + self.students_checked_in

    @property
    def total_out(self) -> int:
        return self.staff_out + self.students_out

    @property
    def total_accounted_for(self) -> int:
        return self.total_checked_in + self.total_out
