"""Duplicate detection for imported leave records.

A record is a possible duplicate when the leave-request store already holds
a request for the same member, day and import batch.
"""

from datetime import date

import structlog

from src.importer.protocols import LeaveRequestStore
from src.importer.results import Failure, Result, Success
from src.matching.schemas import RosterMember

logger = structlog.get_logger()


class DuplicateChecker:
    """Asks the leave-request store whether an equivalent request exists."""

    def __init__(self, store: LeaveRequestStore):
        """Initialize duplicate checker.

        Args:
            store: Leave-request store to query
        """
        self._store = store

    @staticmethod
    def identity_for(member: RosterMember) -> str | int:
        """Internal member id when known, else the employee number."""
        return member.member_id or member.employee_number

    async def check(
        self,
        member: RosterMember,
        event_date: date,
        batch_id: str,
    ) -> Result[bool]:
        """Check whether ``member`` already has leave on ``event_date`` in the batch.

        Args:
            member: Resolved roster member
            event_date: Day of leave
            batch_id: Import batch (calendar) identifier

        Returns:
            Success(True/False), or Failure when the store query failed
        """
        identity = self.identity_for(member)
        try:
            exists = await self._store.has_existing_record(
                identity, event_date, batch_id
            )
        except Exception as e:
            logger.warning(
                "duplicate check failed",
                identity=identity,
                event_date=event_date.isoformat(),
                batch_id=batch_id,
                error=str(e),
            )
            return Failure(error=f"duplicate check failed: {e}", exception=e)
        return Success(bool(exists))
