from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Dict, List, Optional

from src.firedrill_board.firedrill_board.absence.model import AttendanceMark
from src.firedrill_board.firedrill_board.audit.model import AuditEvent
from src.firedrill_board.firedrill_board.core.enums import AdminRole, PersonCategory
from src.firedrill_board.firedrill_board.core.exceptions import FetchError, WriteError
from src.firedrill_board.firedrill_board.roster.model import StaffMember, Student
from src.firedrill_board.firedrill_board.status.model import (
    DrillHistoryEntry,
    PersonKey,
    StatusRecord,
    TableFingerprint,
)


class InMemoryRoster:
    def __init__(self, staff=(), students=()):
        self.staff: List[StaffMember] = list(staff)
        self.students: List[Student] = list(students)
        self.fail = False
        self.calls = 0

    def list_drill_staff(self):
        self.calls += 1
        if self.fail:
            raise FetchError("roster unavailable")
        rows = [s for s in self.staff if s.is_active and not s.exclude_fire_drill]
        return sorted(rows, key=lambda s: s.last_name or "")

    def list_students(self):
        if self.fail:
            raise FetchError("roster unavailable")
        return sorted(self.students, key=lambda s: s.last_name or "")


class InMemoryStatusStore:
    def __init__(self, records=()):
        self.records: Dict[PersonKey, StatusRecord] = {r.key: r for r in records}
        self.write_counts: Dict[PersonKey, int] = {}
        self.history: List[DrillHistoryEntry] = []
        self.upserts: List[dict] = []
        self.fail_reads = False
        self.fail_writes = False
        self.fail_reset = False
        self.fail_history = False
        self.before_upsert: Optional[Callable[[dict], None]] = None

    def list_all(self):
        if self.fail_reads:
            raise FetchError("status table unavailable")
        return list(self.records.values())

    def upsert(self, *, person_id, person_type, checked_in, out_today, checked_in_at, checked_in_by, updated_at):
        row = dict(
            person_id=person_id,
            person_type=person_type,
            checked_in=checked_in,
            out_today=out_today,
            checked_in_at=checked_in_at,
            checked_in_by=checked_in_by,
            updated_at=updated_at,
        )
        if self.before_upsert is not None:
            self.before_upsert(row)
        if self.fail_writes:
            raise WriteError("write rejected")
        self.upserts.append(row)
        key = (person_id, person_type)
        if key in self.records:
            self._bump(key)
        else:
            self.write_counts[key] = 1
        self.records[key] = StatusRecord(**row)

    def reset_all(self, *, updated_at):
        if self.fail_reset:
            raise WriteError("bulk update rejected")
        for key, r in list(self.records.items()):
            self.records[key] = StatusRecord(person_id=r.person_id, person_type=r.person_type, updated_at=updated_at)
            self._bump(key)
        return len(self.records)

    def append_history(self, *, drill_date, reset_by, notes=None):
        if self.fail_history:
            raise WriteError("history insert rejected")
        entry = DrillHistoryEntry(drill_date=drill_date, reset_by=reset_by, notes=notes, history_id=len(self.history) + 1)
        self.history.append(entry)
        return entry.history_id

    def list_history(self, *, limit=20):
        return list(reversed(self.history))[:limit]

    def fingerprint(self):
        if self.fail_reads:
            raise FetchError("status table unavailable")
        stamps = [r.updated_at for r in self.records.values() if r.updated_at]
        return TableFingerprint(
            row_count=len(self.records),
            last_updated_at=max(stamps) if stamps else None,
            write_total=sum(self.write_counts.get(key, 1) for key in self.records),
        )

    def _bump(self, key):
        # rows created outside upsert start at 1, like the column default
        self.write_counts[key] = self.write_counts.get(key, 1) + 1


class InMemoryAbsences:
    def __init__(self, marks=()):
        self.marks: List[AttendanceMark] = list(marks)
        self.fail = False

    def list_for_date(self, attendance_date: date):
        if self.fail:
            raise FetchError("attendance feed unavailable")
        return [m for m in self.marks if m.attendance_date == attendance_date]


class InMemoryAdmins:
    def __init__(self, roles: Optional[Dict[str, AdminRole]] = None):
        self.roles = dict(roles or {})
        self.lookups: List[str] = []
        self.fail = False

    def get_role(self, email: str):
        self.lookups.append(email)
        if self.fail:
            raise FetchError("admin lookup failed")
        return self.roles.get(email)


class InMemoryAuditLog:
    def __init__(self):
        self.events: List[AuditEvent] = []
        self.fail = False

    def insert(self, event: AuditEvent) -> int:
        if self.fail:
            raise WriteError("audit insert failed")
        self.events.append(event)
        return len(self.events)


def staff(person_id: int, first: str, last: str, **kwargs) -> StaffMember:
    return StaffMember(person_id=person_id, first_name=first, last_name=last, full_name=f"{last}, {first}", **kwargs)


def student(person_id: int, first: str, last: str, class_name: str = "3A", grade_level: int = 3) -> Student:
    return Student(person_id=person_id, first_name=first, last_name=last, class_name=class_name, grade_level=grade_level)


def checked_in_record(person_id: int, person_type: PersonCategory, *, by: str = "duty@example.org") -> StatusRecord:
    at = datetime(2026, 10, 18, 9, 0)
    return StatusRecord(
        person_id=person_id,
        person_type=person_type,
        checked_in=True,
        checked_in_at=at,
        checked_in_by=by,
        updated_at=at,
    )


class FakeCursor:
    """Dictionary cursor double for the MySQL repositories."""

    def __init__(self, rows=(), error=None):
        self.rows = list(rows)
        self.error = error
        self.queries: List[str] = []
        self.params: List[object] = []
        self.rowcount = 0
        self.lastrowid = 0
        self.closed = False

    def execute(self, sql, params=None):
        self.queries.append(sql)
        self.params.append(params)
        if self.error is not None:
            raise self.error

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def fake_db(rows=(), error=None):
    cur = FakeCursor(rows, error=error)
    conn = FakeConnection(cur)
    return FakeConnFactory(conn), conn, cur
