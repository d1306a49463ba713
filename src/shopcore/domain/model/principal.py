"""The authenticated caller, as handed to us by the auth collaborator.

Credentials are never issued or checked here; a Principal is trusted
as already verified.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shopcore.domain.exceptions import Forbidden, Unauthenticated


class Role(Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    CUSTOMER = "CUSTOMER"


@dataclass(frozen=True)
class Principal:
    id: str
    role: Role = Role.CUSTOMER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def require_principal(principal: Principal | None) -> Principal:
    if principal is None or not principal.id:
        raise Unauthenticated("Authentication required")
    return principal


def require_role(principal: Principal | None, role: Role) -> Principal:
    """Guard used by outer surfaces before they reach an admin-only use case."""
    principal = require_principal(principal)
    if principal.role is not role:
        raise Forbidden(f"Requires role {role.value}")
    return principal


def require_owner_or_admin(principal: Principal | None, owner_id: str, resource: str) -> Principal:
    """Only admins and the owning customer may read a customer's resource."""
    principal = require_principal(principal)
    if not principal.is_admin and principal.id != owner_id:
        raise Forbidden(f"{resource} belongs to another customer")
    return principal
