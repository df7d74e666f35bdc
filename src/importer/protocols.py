"""Interfaces of the stores the import pipeline reads from.

Repositories implement these protocols structurally - they don't need to
inherit, just provide the methods.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from src.matching.schemas import RosterMember


@runtime_checkable
class RosterQuery(Protocol):
    """Read access to the member roster."""

    async def search_members(
        self,
        given_fragment: str,
        family_fragment: str,
        division_id: int | None = None,
    ) -> list[RosterMember]:
        """Find members whose given or family name contains a fragment.

        Matching is case-insensitive; the division filter is optional.
        """
        ...


@runtime_checkable
class LeaveRequestStore(Protocol):
    """Read access to existing leave requests."""

    async def has_existing_record(
        self,
        member_id_or_employee_number: str | int,
        event_date: date,
        batch_id: str,
    ) -> bool:
        """Check for a request with the same identity, date and batch."""
        ...
