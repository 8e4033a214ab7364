from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core.enums import AuditCategory, AuditEventType
from ..core.exceptions import StoreError
from .model import AuditEvent
from .repository import AuditRepository

logger = logging.getLogger(__name__)


def get_client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """Client address behind proxies.

    X-Forwarded-For may hold "client, proxy1, proxy2"; the first entry wins.
    """

    forwarded = headers.get("X-Forwarded-For") or headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("X-Real-IP") or headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return None


class AuditService:
    """Writes audit events at data boundaries (sign-in, data changes, resets).

    log_event never raises: a failed insert is logged and the caller's flow
    continues.
    """

    def __init__(self, events: AuditRepository, *, portal: str):
        self._events = events
        self._portal = portal

    def log_event(
        self,
        event_type: AuditEventType,
        event_category: AuditCategory,
        *,
        action: Optional[str] = None,
        user_email: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        source_url: Optional[str] = None,
        target_url: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        event = AuditEvent(
            event_type=event_type,
            event_category=event_category,
            portal=self._portal,
            action=action,
            user_email=user_email,
            ip_address=ip_address,
            user_agent=user_agent,
            source_url=source_url,
            target_url=target_url,
            metadata=dict(metadata or {}),
        )
        try:
            self._events.insert(event)
        except StoreError as e:
            logger.error(
                "Failed to log audit event %s/%s for %s: %s",
                event_type.value,
                action,
                user_email,
                e,
            )
            return False
        return True
