"""Request Context — immutable per-request identity handed to the data-access core.

Invariants:
    - At most one user per context; "no user" is a valid state
    - Contexts are frozen: the core reads them, never mutates them
    - A ContextUser may carry only an id or only an email (partially resolved upstream)

Design Decisions:
    - Passed as an explicit argument to every UserAPI call instead of being
      set on the data source between calls (no shared mutable state across requests)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContextUser:
    """Authenticated identity resolved upstream of the core."""
    id: int | None = None
    email: str | None = None


@dataclass(frozen=True)
class RequestContext:
    user: ContextUser | None = None

    @classmethod
    def anonymous(cls) -> "RequestContext":
        return cls()

    @classmethod
    def for_user(cls, id: int | None = None, email: str | None = None) -> "RequestContext":
        return cls(user=ContextUser(id=id, email=email))

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user else None

    @property
    def user_email(self) -> str | None:
        return self.user.email if self.user else None
