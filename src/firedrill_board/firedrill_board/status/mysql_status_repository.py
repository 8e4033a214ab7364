from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence

from ..core.enums import PersonCategory
from ..core.exceptions import FetchError, WriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_utc, db_cursor, fetchall, fetchone, to_db_datetime
from .model import DrillHistoryEntry, StatusRecord, TableFingerprint
from .repository import StatusRepository

logger = logging.getLogger(__name__)


class MySQLStatusRepository(StatusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StatusRecord]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT person_id, person_type, checked_in, out_today, checked_in_at, checked_in_by, updated_at
                FROM firedrill_status
                """
            )
            records: List[StatusRecord] = []
            for r in fetchall(cur):
                try:
                    person_type = PersonCategory(r["person_type"])
                except ValueError:
                    # Shared table; rows written by other tools may use types the board does not show.
                    logger.warning(
                        "skipping status row with unknown person_type %r (person_id=%s)",
                        r["person_type"],
                        r["person_id"],
                    )
                    continue
                records.append(
                    StatusRecord(
                        person_id=int(r["person_id"]),
                        person_type=person_type,
                        checked_in=as_bool(r.get("checked_in")),
                        out_today=as_bool(r.get("out_today")),
                        checked_in_at=as_utc(r.get("checked_in_at")),
                        checked_in_by=r.get("checked_in_by"),
                        updated_at=as_utc(r.get("updated_at")),
                    )
                )
            return records

    def upsert(
        self,
        *,
        person_id: int,
        person_type: PersonCategory,
        checked_in: bool,
        out_today: bool,
        checked_in_at: Optional[datetime],
        checked_in_by: Optional[str],
        updated_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory, error=WriteError) as (_, cur):
            cur.execute(
                """
                INSERT INTO firedrill_status
                    (person_id, person_type, checked_in, out_today, checked_in_at, checked_in_by, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    checked_in = VALUES(checked_in),
                    out_today = VALUES(out_today),
                    checked_in_at = VALUES(checked_in_at),
                    checked_in_by = VALUES(checked_in_by),
                    updated_at = VALUES(updated_at),
                    write_count = write_count + 1
                """,
                (
                    int(person_id),
                    person_type.value,
                    int(bool(checked_in)),
                    int(bool(out_today)),
                    to_db_datetime(checked_in_at),
                    checked_in_by,
                    to_db_datetime(updated_at),
                ),
            )

    def reset_all(self, *, updated_at: datetime) -> int:
        with db_cursor(self._conn_factory, error=WriteError) as (_, cur):
            cur.execute(
                """
                UPDATE firedrill_status
                SET checked_in = 0, out_today = 0, checked_in_at = NULL, checked_in_by = NULL, updated_at = %s,
                    write_count = write_count + 1
                WHERE id <> 0
                """,
                (to_db_datetime(updated_at),),
            )
            return int(cur.rowcount)

    def append_history(self, *, drill_date: date, reset_by: str, notes: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory, error=WriteError) as (_, cur):
            cur.execute(
                "INSERT INTO firedrill_history (drill_date, reset_by, notes) VALUES (%s, %s, %s)",
                (drill_date, reset_by, notes),
            )
            return int(cur.lastrowid)

    def list_history(self, *, limit: int = 20) -> Sequence[DrillHistoryEntry]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT history_id, drill_date, reset_by, notes, created_at
                FROM firedrill_history
                ORDER BY history_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                DrillHistoryEntry(
                    history_id=int(r["history_id"]),
                    drill_date=r["drill_date"],
                    reset_by=r["reset_by"],
                    notes=r.get("notes"),
                    created_at=as_utc(r.get("created_at")),
                )
                for r in fetchall(cur)
            ]

    def fingerprint(self) -> TableFingerprint:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS row_count,
                       COALESCE(SUM(write_count), 0) AS write_total,
                       MAX(updated_at) AS last_updated_at
                FROM firedrill_status
                """
            )
            r = fetchone(cur) or {}
            return TableFingerprint(
                row_count=int(r.get("row_count") or 0),
                last_updated_at=as_utc(r.get("last_updated_at")),
                write_total=int(r.get("write_total") or 0),
            )
