from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AdminRole


@dataclass(frozen=True)
class Identity:
    """What the board consumes from the identity collaborator."""

    email: str
    is_member: bool
    admin_role: Optional[AdminRole] = None
    can_reset: bool = False

    @property
    def is_admin(self) -> bool:
        return self.admin_role is not None

    @property
    def is_super_admin(self) -> bool:
        return self.admin_role == AdminRole.SUPER_ADMIN
