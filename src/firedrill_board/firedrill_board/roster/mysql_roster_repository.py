from __future__ import annotations

from typing import Sequence

from ..core.exceptions import FetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall
from .model import StaffMember, Student
from .repository import RosterRepository


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_drill_staff(self) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT person_id, first_name, last_name, full_name, is_active, exclude_fire_drill
                FROM staff
                WHERE is_active = 1
                  AND (exclude_fire_drill IS NULL OR exclude_fire_drill = 0)
                ORDER BY last_name
                """
            )
            rows = fetchall(cur)
            return [
                StaffMember(
                    person_id=int(r["person_id"]),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    full_name=r.get("full_name"),
                    is_active=as_bool(r.get("is_active")),
                    exclude_fire_drill=as_bool(r.get("exclude_fire_drill")),
                )
                for r in rows
            ]

    def list_students(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT person_id, first_name, last_name, class AS class_name, grade_level
                FROM students
                ORDER BY last_name
                """
            )
            rows = fetchall(cur)
            return [
                Student(
                    person_id=int(r["person_id"]),
                    first_name=r.get("first_name"),
                    last_name=r.get("last_name"),
                    class_name=r.get("class_name"),
                    grade_level=int(r["grade_level"]) if r.get("grade_level") is not None else None,
                )
                for r in rows
            ]
