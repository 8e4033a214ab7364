from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import AdminRole


class AdminRepository(Protocol):
    def get_role(self, email: str) -> Optional[AdminRole]:
        """Role for an already-lowercased email, or None when not an admin."""

        raise NotImplementedError
