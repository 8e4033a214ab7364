from __future__ import annotations

from typing import Optional

from ..core.enums import AdminRole
from ..core.exceptions import FetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_role(self, email: str) -> Optional[AdminRole]:
        with db_cursor(self._conn_factory, error=FetchError) as (_, cur):
            cur.execute("SELECT role FROM firedrill_admins WHERE email=%s", (email,))
            r = fetchone(cur)
            if not r:
                return None
            try:
                return AdminRole(r["role"])
            except ValueError:
                # Unknown role strings still mark the row as an admin entry.
                return AdminRole.ADMIN
