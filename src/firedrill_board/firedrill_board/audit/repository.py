from __future__ import annotations

from typing import Protocol

from .model import AuditEvent


class AuditRepository(Protocol):
    def insert(self, event: AuditEvent) -> int:
        raise NotImplementedError
