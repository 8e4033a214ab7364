from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, error: Type[StoreError] = StoreError):
    """Yield (conn, cursor); commit on success, rollback on failure.

    Driver errors surface as ``error`` (a StoreError subclass) so callers
    never depend on mysql.connector directly.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise error(f"Database connection failed: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise error(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_bool(value: Any) -> bool:
    """Normalize MySQL BOOLEAN (TINYINT) values; NULL counts as false."""

    if value is None:
        return False
    if isinstance(value, (bytes, bytearray)):
        return value not in (b"", b"\x00", b"0")
    return bool(int(value)) if not isinstance(value, bool) else value


def as_utc(value: Any) -> Optional[datetime]:
    """Normalize DATETIME values, stored as naive UTC, to aware datetimes.

    mysql-connector can return DATETIME as datetime or as an ISO string.
    """

    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if not isinstance(value, datetime):
        raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetime -> naive UTC for DATETIME columns."""

    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
