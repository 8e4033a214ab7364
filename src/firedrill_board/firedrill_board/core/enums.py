from __future__ import annotations

from enum import Enum


class PersonCategory(str, Enum):
    """Population a person belongs to; stored as person_type."""

    STAFF = "staff"
    STUDENT = "student"


class AdminRole(str, Enum):
    """Privilege tier from the firedrill_admins table."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    UNKNOWN = "*"


class AuditEventType(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
    DATA_CHANGE = "data_change"
    ACCESS = "access"
    API_CALL = "api_call"
    SYSTEM = "system"


class AuditCategory(str, Enum):
    AUTH = "auth"
    DATA = "data"
    ACCESS = "access"
    SYSTEM = "system"
