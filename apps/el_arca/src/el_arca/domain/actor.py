"""Request-scoped identity of the user calling a treasury operation."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from el_arca.domain.errors import ForbiddenError


class ActorRole(enum.StrEnum):
    """Roles known by the treasury."""

    ADMIN = "admin"
    PRESIDENT = "president"


@dataclass(frozen=True, slots=True)
class Actor:
    """Authenticated caller passed explicitly into services."""

    user_id: str
    role: ActorRole

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    def require_admin(self) -> Actor:
        if not self.is_admin:
            raise ForbiddenError(details={"role": self.role.value})
        return self


SYSTEM_ACTOR = Actor(user_id="system", role=ActorRole.ADMIN)
