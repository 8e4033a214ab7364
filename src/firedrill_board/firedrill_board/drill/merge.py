from __future__ import annotations

from dataclasses import replace
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

from ..core.constants import STAFF_GROUP_LABEL
from ..core.enums import PersonCategory
from ..roster.model import StaffMember, Student
from ..status.model import PersonKey, StatusRecord
from .model import Person


def _split_full_name(full_name: Optional[str]) -> tuple[str, str]:
    # Staff feed stores "Last, First".
    if not full_name:
        return "", ""
    last, _, first = full_name.partition(", ")
    return first, last


def _apply_status(person: Person, status: Optional[StatusRecord]) -> Person:
    if status is None:
        return person
    checked_in = bool(status.checked_in)
    out_today = bool(status.out_today)
    # A stored row with both flags set is treated as out; the pair is exclusive in memory.
    if checked_in and out_today:
        checked_in = False
    return replace(
        person,
        checked_in=checked_in,
        out_today=out_today,
        checked_in_at=status.checked_in_at if checked_in else None,
        checked_in_by=status.checked_in_by if checked_in else None,
    )


def staff_to_person(row: StaffMember, *, absent: AbstractSet[int]) -> Person:
    split_first, split_last = _split_full_name(row.full_name)
    first = row.first_name or split_first
    last = row.last_name or split_last
    return Person(
        person_id=row.person_id,
        category=PersonCategory.STAFF,
        first_name=first,
        last_name=last,
        full_name=row.full_name or f"{last}, {first}",
        class_name=STAFF_GROUP_LABEL,
        vc_absent=row.person_id in absent,
    )


def student_to_person(row: Student, *, absent: AbstractSet[int]) -> Person:
    first = row.first_name or ""
    last = row.last_name or ""
    return Person(
        person_id=row.person_id,
        category=PersonCategory.STUDENT,
        first_name=first,
        last_name=last,
        full_name=f"{last}, {first}",
        class_name=row.class_name or None,
        grade_level=row.grade_level,
        vc_absent=row.person_id in absent,
    )


def merge_people(
    staff: Iterable[StaffMember],
    students: Iterable[Student],
    statuses: Iterable[StatusRecord],
    absent: AbstractSet[int] = frozenset(),
) -> List[Person]:
    """Join both rosters with the status table on (id, category).

    Staff come first, then students, each in roster order. A roster that
    repeats an id keeps its first occurrence so every key appears once.
    """

    status_by_key: Dict[PersonKey, StatusRecord] = {s.key: s for s in statuses}

    merged: List[Person] = []
    seen: set[PersonKey] = set()
    candidates: Sequence[Iterable[Person]] = (
        (staff_to_person(s, absent=absent) for s in staff),
        (student_to_person(s, absent=absent) for s in students),
    )
    for group in candidates:
        for person in group:
            if person.key in seen:
                continue
            seen.add(person.key)
            merged.append(_apply_status(person, status_by_key.get(person.key)))
    return merged
