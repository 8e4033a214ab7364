from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.enums import AuditCategory, AuditEventType


@dataclass(frozen=True)
class AuditEvent:
    event_type: AuditEventType
    event_category: AuditCategory
    portal: str
    action: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    source_url: Optional[str] = None
    target_url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
