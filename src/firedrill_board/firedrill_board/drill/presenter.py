from __future__ import annotations

from typing import Any, Dict

from ..common.datetime_utils import to_iso
from .model import DrillStats, Person


def card_state(person: Person) -> str:
    """Visual state of a person card; out wins over checked in, then the absence warning."""

    if person.out_today:
        return "out"
    if person.checked_in:
        return "checked_in"
    if person.vc_absent:
        return "vc_absent"
    return "pending"


def person_to_dict(person: Person) -> Dict[str, Any]:
    return {
        "person_id": person.person_id,
        "person_type": person.category.value,
        "first_name": person.first_name,
        "last_name": person.last_name,
        "full_name": person.full_name,
        "class_name": person.class_name,
        "grade_level": person.grade_level,
        "checked_in": person.checked_in,
        "out_today": person.out_today,
        "checked_in_at": to_iso(person.checked_in_at),
        "checked_in_by": person.checked_in_by,
        "vc_absent": person.vc_absent,
        "state": card_state(person),
    }


def stats_to_dict(stats: DrillStats) -> Dict[str, Any]:
    total = stats.total_people
    return {
        "totalStaff": stats.total_staff,
        "staffCheckedIn": stats.staff_checked_in,
        "staffOut": stats.staff_out,
        "staffVcAbsent": stats.staff_vc_absent,
        "totalStudents": stats.total_students,
        "studentsCheckedIn": stats.students_checked_in,
        "studentsOut": stats.students_out,
        "studentsVcAbsent": stats.students_vc_absent,
        "overallPercent": stats.overall_percent,
        "progress": {
            "checked_in_width": round(100.0 * stats.total_checked_in / total, 2) if total else 0.0,
            "out_width": round(100.0 * stats.total_out / total, 2) if total else 0.0,
            "accounted_for": stats.total_accounted_for,
            "total": total,
        },
    }
