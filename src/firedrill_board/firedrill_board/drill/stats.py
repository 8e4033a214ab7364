from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

from ..core.constants import STAFF_GROUP_LABEL
from ..core.enums import PersonCategory
from .model import DrillStats, Person


def percent(part: int, total: int) -> int:
    """round(100 * part / total), half-up; 0 when total is 0."""

    if total <= 0:
        return 0
    value = Decimal(100 * part) / Decimal(total)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_stats(people: Iterable[Person]) -> DrillStats:
    people = list(people)
    staff = [p for p in people if p.category == PersonCategory.STAFF]
    students = [p for p in people if p.category == PersonCategory.STUDENT]

    def _absent_unaccounted(group: List[Person]) -> int:
        return sum(1 for p in group if p.vc_absent and not p.checked_in and not p.out_today)

    staff_checked_in = sum(1 for p in staff if p.checked_in)
    staff_out = sum(1 for p in staff if p.out_today)
    students_checked_in = sum(1 for p in students if p.checked_in)
    students_out = sum(1 for p in students if p.out_today)

    accounted = staff_checked_in + staff_out + students_checked_in + students_out
    return DrillStats(
        total_staff=len(staff),
        staff_checked_in=staff_checked_in,
        staff_out=staff_out,
        staff_vc_absent=_absent_unaccounted(staff),
        total_students=len(students),
        students_checked_in=students_checked_in,
        students_out=students_out,
        students_vc_absent=_absent_unaccounted(students),
        overall_percent=percent(accounted, len(staff) + len(students)),
    )


def distinct_classes(people: Iterable[Person]) -> List[str]:
    """Sorted grouping labels for the class filter, without the staff sentinel."""

    return sorted({p.class_name for p in people if p.class_name and p.class_name != STAFF_GROUP_LABEL})
