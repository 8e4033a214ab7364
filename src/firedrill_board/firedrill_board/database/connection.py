from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

# DATETIME columns hold naive UTC; pin the session so CURRENT_TIMESTAMP defaults agree.
SESSION_TIME_ZONE = "+00:00"
CONNECT_TIMEOUT_SECONDS = 5


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "firedrill_db")),
        )

    @property
    def label(self) -> str:
        """user@host:port/database, for logs and script output (no password)."""

        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            time_zone=SESSION_TIME_ZONE,
            connection_timeout=CONNECT_TIMEOUT_SECONDS,
        )
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Process-wide factory for drill board connections.

    Every repository call opens its own short-lived connection: the board's
    load fans out over a thread pool and the status poller runs on its own
    thread, so no connection is ever shared between threads.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs())
