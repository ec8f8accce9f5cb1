"""
UserContext -- explicit caller identity for service entry points.

The application runs single-user: every request acts as one fixed user.
Instead of hardcoding that id at each call site, services accept a
``UserContext`` and fall back to ``UserContext.single_user()``.  The
context is only used for log correlation; calculations never read it.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

DEFAULT_USER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")
DEFAULT_TENANT_ID = "default"


@dataclass(frozen=True)
class UserContext:
    """Identity of the caller on whose behalf a calculation runs."""

    user_id: UUID
    tenant_id: str = DEFAULT_TENANT_ID
    display_name: str | None = None

    @classmethod
    def single_user(cls) -> UserContext:
        """The fixed user of a single-tenant deployment."""
        return cls(user_id=DEFAULT_USER_ID)

    def log_fields(self) -> dict[str, str]:
        """Fields suitable for ``LogContext.bind``."""
        return {"actor_id": str(self.user_id), "tenant_id": self.tenant_id}
