from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import email_in_domain, normalize_email
from ..core.enums import AdminRole
from ..core.exceptions import AuthenticationError, AuthorizationError, StoreError
from .model import Identity
from .repository import AdminRepository

logger = logging.getLogger(__name__)


class AccessService:
    """Use case: decide who may use the board and who may reset it.

    ``reset_tier`` picks the privilege needed for reset: ADMIN lets every
    listed admin reset, SUPER_ADMIN restricts it to super admins.
    """

    def __init__(self, admins: AdminRepository, *, allowed_domain: str, reset_tier: AdminRole = AdminRole.ADMIN):
        self._admins = admins
        self._allowed_domain = allowed_domain
        self._reset_tier = reset_tier

    @property
    def allowed_domain(self) -> str:
        return self._allowed_domain

    def is_allowed_member(self, email: Optional[str]) -> bool:
        return email_in_domain(email, self._allowed_domain)

    def admin_role(self, email: Optional[str]) -> Optional[AdminRole]:
        email = normalize_email(email)
        if not email:
            return None
        try:
            return self._admins.get_role(email)
        except StoreError as e:
            logger.warning("admin lookup failed for %s: %s", email, e)
            return None

    def is_admin(self, email: Optional[str]) -> bool:
        return self.admin_role(email) is not None

    def is_super_admin(self, email: Optional[str]) -> bool:
        return self.admin_role(email) == AdminRole.SUPER_ADMIN

    def _role_can_reset(self, role: Optional[AdminRole]) -> bool:
        if role is None:
            return False
        if self._reset_tier == AdminRole.SUPER_ADMIN:
            return role == AdminRole.SUPER_ADMIN
        return True

    def can_reset(self, email: Optional[str]) -> bool:
        return self.is_allowed_member(email) and self._role_can_reset(self.admin_role(email))

    def resolve_identity(self, email: Optional[str]) -> Identity:
        email = normalize_email(email)
        is_member = self.is_allowed_member(email)
        role = self.admin_role(email) if is_member else None
        return Identity(email=email, is_member=is_member, admin_role=role, can_reset=self._role_can_reset(role))

    def require_member(self, email: Optional[str]) -> Identity:
        identity = self.resolve_identity(email)
        if not identity.is_member:
            raise AuthenticationError(f"Staff accounts only (@{self._allowed_domain})")
        return identity

    def require_reset(self, email: Optional[str]) -> Identity:
        identity = self.require_member(email)
        if not identity.can_reset:
            raise AuthorizationError("You do not have permission to reset the drill")
        return identity
