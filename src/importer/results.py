"""Explicit results for lookups that can fail.

Roster searches and duplicate checks return Success or Failure instead of
raising, so the orchestrator handles every failure path by construction.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Lookup completed with a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Lookup failed; ``error`` is a human-readable description."""

    error: str
    exception: Exception | None = None

    @property
    def ok(self) -> bool:
        return False


Result = Success[T] | Failure
