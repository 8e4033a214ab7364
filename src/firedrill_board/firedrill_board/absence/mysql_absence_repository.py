from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.exceptions import FetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceMark
from .repository import AbsenceRepository


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceMark]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT person_id, attendance_date, attendance_category
                FROM master_attendance
                WHERE attendance_date = %s
                """,
                (attendance_date,),
            )
            return [
                AttendanceMark(
                    person_id=int(r["person_id"]),
                    attendance_date=r["attendance_date"],
                    attendance_category=int(r.get("attendance_category") or 0),
                )
                for r in fetchall(cur)
            ]
