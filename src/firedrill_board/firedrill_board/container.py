from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .absence.mysql_absence_repository import MySQLAbsenceRepository
from .absence.repository import AbsenceRepository
from .absence.service import AbsenceSignal
from .access.mysql_admin_repository import MySQLAdminRepository
from .access.repository import AdminRepository
from .access.service import AccessService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.repository import AuditRepository
from .audit.service import AuditService
from .changes.bus import ChangeBus
from .changes.notifying import NotifyingStatusRepository
from .changes.poller import StatusTablePoller
from .core.constants import DEFAULT_POLL_SECONDS, DEFAULT_PORTAL_NAME
from .core.enums import AdminRole
from .database.connection import DBConfig, DatabaseConnection
from .drill.board import DrillBoard
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .status.mysql_status_repository import MySQLStatusRepository
from .status.repository import StatusRepository


@dataclass(frozen=True)
class Container:
    roster_repo: RosterRepository
    status_repo: StatusRepository
    absence_repo: AbsenceRepository
    admins_repo: AdminRepository
    audit_repo: AuditRepository

    change_bus: ChangeBus
    access_service: AccessService
    audit_service: AuditService
    board: DrillBoard
    poller: Optional[StatusTablePoller] = None
    conn: Optional[DatabaseConnection] = None

    def start(self) -> None:
        """Activate the board on the bus and start watching the status table."""

        self.board.activate(self.change_bus)
        if self.poller is not None:
            self.poller.start()

    def shutdown(self) -> None:
        if self.poller is not None:
            self.poller.stop(timeout=5)
        self.board.deactivate()
        self.change_bus.close()


def wire(
    *,
    roster_repo,
    status_repo,
    absence_repo,
    admins_repo,
    audit_repo,
    allowed_domain: str,
    reset_tier: AdminRole = AdminRole.ADMIN,
    portal: str = DEFAULT_PORTAL_NAME,
    poll_seconds: float = 0,
    conn: Optional[DatabaseConnection] = None,
    board_kwargs: Optional[dict] = None,
) -> Container:
    """Assemble services over any repository implementations.

    Status writes go through NotifyingStatusRepository so every accepted
    write reaches local subscribers without waiting for the poller.
    """

    change_bus = ChangeBus()
    notifying_status = NotifyingStatusRepository(status_repo, change_bus)

    board = DrillBoard(
        roster_repo,
        notifying_status,
        AbsenceSignal(absence_repo),
        **(board_kwargs or {}),
    )
    poller = StatusTablePoller(status_repo, change_bus, interval=poll_seconds) if poll_seconds > 0 else None

    return Container(
        roster_repo=roster_repo,
        status_repo=notifying_status,
        absence_repo=absence_repo,
        admins_repo=admins_repo,
        audit_repo=audit_repo,
        change_bus=change_bus,
        access_service=AccessService(admins_repo, allowed_domain=allowed_domain, reset_tier=reset_tier),
        audit_service=AuditService(audit_repo, portal=portal),
        board=board,
        poller=poller,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    allowed_domain: str,
    reset_tier: AdminRole = AdminRole.ADMIN,
    portal: str = DEFAULT_PORTAL_NAME,
    poll_seconds: float = DEFAULT_POLL_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        roster_repo=MySQLRosterRepository(conn),
        status_repo=MySQLStatusRepository(conn),
        absence_repo=MySQLAbsenceRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        audit_repo=MySQLAuditRepository(conn),
        allowed_domain=allowed_domain,
        reset_tier=reset_tier,
        portal=portal,
        poll_seconds=poll_seconds,
        conn=conn,
    )
