from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StaffMember:
    """Roster row from the staff table (read-only)."""

    person_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    full_name: Optional[str] = None
    is_active: bool = True
    exclude_fire_drill: bool = False


@dataclass(frozen=True)
class Student:
    """Roster row from the students table (read-only)."""

    person_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    class_name: Optional[str] = None
    grade_level: Optional[int] = None
