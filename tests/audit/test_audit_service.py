from __future__ import annotations

from src.firedrill_board.firedrill_board.audit.service import AuditService, get_client_ip
from src.firedrill_board.firedrill_board.core.enums import AuditCategory, AuditEventType
from tests.fakes import InMemoryAuditLog


def test_log_event_records_portal_and_metadata():
    log = InMemoryAuditLog()
    svc = AuditService(log, portal="firedrill")

    ok = svc.log_event(
        AuditEventType.LOGIN,
        AuditCategory.AUTH,
        action="success",
        user_email="a@x.org",
        metadata={"login_method": "proxy_header"},
    )

    assert ok is True
    (event,) = log.events
    assert event.portal == "firedrill"
    assert event.event_type == AuditEventType.LOGIN
    assert event.metadata == {"login_method": "proxy_header"}


def test_log_event_never_raises():
    log = InMemoryAuditLog()
    log.fail = True
    svc = AuditService(log, portal="firedrill")

    assert svc.log_event(AuditEventType.SYSTEM, AuditCategory.SYSTEM) is False


def test_client_ip_prefers_first_forwarded_address():
    assert get_client_ip({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}) == "203.0.113.7"
    assert get_client_ip({"X-Real-IP": " 198.51.100.2 "}) == "198.51.100.2"
    assert get_client_ip({}) is None
