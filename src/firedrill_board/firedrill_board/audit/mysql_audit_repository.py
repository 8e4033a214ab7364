from __future__ import annotations

import json

from ..core.exceptions import WriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import AuditEvent
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, event: AuditEvent) -> int:
        with db_cursor(self._conn_factory, error=WriteError) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_events
                    (event_type, event_category, portal, action, user_email, user_name,
                     ip_address, user_agent, source_url, target_url, metadata)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    event.event_type.value,
                    event.event_category.value,
                    event.portal,
                    event.action,
                    event.user_email,
                    event.user_name,
                    event.ip_address,
                    event.user_agent,
                    event.source_url,
                    event.target_url,
                    json.dumps(event.metadata, default=str) if event.metadata else None,
                ),
            )
            return int(cur.lastrowid)
