"""Authorization gate — role and ownership predicate.

``authorize`` never raises for an expected denial; it returns an
AuthDecision the caller inspects (or converts with ``raise_if_denied``).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.vm_common.enums import UserRole
from src.vm_common.errors import ForbiddenError


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as supplied by the identity provider."""

    user_id: str
    role: UserRole


@dataclass(frozen=True)
class AuthDecision:
    allowed: bool
    reason: str | None = None

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise ForbiddenError(self.reason or "Forbidden")


ALLOW = AuthDecision(allowed=True)


def authorize(
    principal: Principal,
    required_roles: Iterable[UserRole],
    resource_owner_id: str | None = None,
) -> AuthDecision:
    """Allow iff the principal holds one of ``required_roles`` and, when an
    owner is given, is that owner. UUID comparison is case-insensitive."""
    roles = {UserRole(r) for r in required_roles}
    if UserRole(principal.role) not in roles:
        allowed = ", ".join(sorted(r.value for r in roles))
        return AuthDecision(
            allowed=False,
            reason=f"Role {UserRole(principal.role).value} not allowed (requires {allowed})",
        )
    if resource_owner_id is not None and (
        str(principal.user_id).lower() != str(resource_owner_id).lower()
    ):
        return AuthDecision(allowed=False, reason="Caller does not own this resource")
    return ALLOW
