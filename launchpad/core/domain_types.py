"""Domain Types — identity types and the tagged lookup outcome.

Invariants:
    - UserId and LaunchId wrap ints; never pass bare ints through the core signatures
    - Outcome.kind is FOUND iff value is not None
    - Outcome.kind is STORE_ERROR iff error is not None

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Outcome keeps "not found" and "store failed" apart internally; public
      operations decide whether to collapse them into a None sentinel
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NewType, TypeVar

from launchpad.core.errors import LaunchpadError


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
LaunchId = NewType("LaunchId", int)


# ─── Outcomes ────────────────────────────────────────────────────

class OutcomeKind(str, Enum):
    """Result of a find-or-create style lookup."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    STORE_ERROR = "store_error"


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged lookup result. Build with found() / not_found() / store_error()."""
    kind: OutcomeKind
    value: T | None = None
    error: LaunchpadError | None = None

    @classmethod
    def found(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeKind.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "Outcome[T]":
        return cls(OutcomeKind.NOT_FOUND)

    @classmethod
    def store_error(cls, error: LaunchpadError) -> "Outcome[T]":
        return cls(OutcomeKind.STORE_ERROR, error=error)

    @property
    def is_found(self) -> bool:
        return self.kind is OutcomeKind.FOUND

    def value_or_none(self) -> T | None:
        """Collapse NOT_FOUND and STORE_ERROR into None."""
        return self.value if self.is_found else None
