"""ImportPreviewService builds the reviewable preview of an import batch.

Per record (independently, with bounded concurrency):
1. Normalize the name; blank names are Unmatched without a roster lookup
2. Search the roster (scoped to the division when known) and classify
3. Derive the target status and requested-at timestamp
4. For Matched records, check for an existing request in the same batch

Lookup failures degrade the affected item and are logged; the preview always
has one item per input record, in input order.
"""

import asyncio
from collections.abc import Sequence
from datetime import datetime

import structlog

from src.importer.duplicate_checker import DuplicateChecker
from src.importer.protocols import RosterQuery
from src.importer.results import Failure, Result, Success
from src.importer.schemas import ExternalLeaveRecord, PreviewItem, TargetStatus
from src.matching.classifier import CandidateClassifier
from src.matching.schemas import (
    MatchCandidate,
    Matched,
    MatchOutcome,
    RosterMember,
    Unmatched,
)

logger = structlog.get_logger()


def target_status_for(record: ExternalLeaveRecord) -> TargetStatus:
    """Waitlisted records stay waitlisted; everything else imports approved."""
    return TargetStatus.WAITLISTED if record.is_waitlisted else TargetStatus.APPROVED


def target_requested_at_for(record: ExternalLeaveRecord) -> datetime:
    """Waitlist position depends on the original request time when known."""
    if record.is_waitlisted and record.original_request_date is not None:
        return record.original_request_date
    return record.created_at


class ImportPreviewService:
    """Drives name matching and duplicate detection over an import batch."""

    def __init__(
        self,
        roster: RosterQuery,
        classifier: CandidateClassifier,
        duplicate_checker: DuplicateChecker,
        max_concurrency: int = 8,
    ):
        """Initialize service with its collaborators.

        Args:
            roster: Roster search used to fetch candidates
            classifier: Scores and classifies candidates
            duplicate_checker: Checks matched records for existing requests
            max_concurrency: Maximum records resolved at the same time
        """
        if max_concurrency < 1:
            msg = "max_concurrency must be at least 1"
            raise ValueError(msg)
        self._roster = roster
        self._classifier = classifier
        self._duplicates = duplicate_checker
        self._max_concurrency = max_concurrency

    async def generate_preview(
        self,
        records: Sequence[ExternalLeaveRecord],
        batch_id: str,
        division_id: int | None = None,
    ) -> list[PreviewItem]:
        """Build one preview item per record.

        Cancelling the caller cancels every in-flight lookup; nothing is
        written during preview.

        Args:
            records: Parsed external leave records, in calendar order
            batch_id: Import batch (calendar) identifier
            division_id: Optional division to scope roster searches to

        Returns:
            Preview items in the same order as ``records``
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(record: ExternalLeaveRecord) -> PreviewItem:
            async with semaphore:
                return await self._preview_one(record, batch_id, division_id)

        items = await asyncio.gather(*(bounded(r) for r in records))

        logger.info(
            "import preview generated",
            batch_id=batch_id,
            division_id=division_id,
            total=len(items),
            matched=sum(1 for i in items if i.is_resolved),
            possible_duplicates=sum(1 for i in items if i.is_possible_duplicate),
        )
        return list(items)

    async def find_members(
        self,
        given_name: str,
        family_name: str,
        division_id: int | None = None,
    ) -> list[MatchCandidate]:
        """Roster members plausibly named ``given_name family_name``, best first.

        Backs manual resolution of ambiguous or unmatched preview items.
        Unlike preview, a failed roster lookup is raised to the caller.

        Args:
            given_name: First name typed by the operator
            family_name: Last name typed by the operator
            division_id: Optional division to scope the search to

        Returns:
            Candidates above the confidence floor, highest confidence first
        """
        query = self._classifier.build_query(given_name, family_name)
        if query.is_empty:
            return []
        members = await self._roster.search_members(
            given_name.strip(), family_name.strip(), division_id
        )
        return self._classifier.rank(query, members)

    async def _preview_one(
        self,
        record: ExternalLeaveRecord,
        batch_id: str,
        division_id: int | None,
    ) -> PreviewItem:
        errors: list[str] = []
        try:
            outcome = await self._resolve(record, division_id, errors)
        except Exception as e:
            logger.exception(
                "record resolution failed", name=record.display_name, error=str(e)
            )
            errors.append(f"resolution failed: {e}")
            outcome = Unmatched(reason="resolution failed")

        is_duplicate = False
        if isinstance(outcome, Matched):
            result = await self._duplicates.check(
                outcome.member, record.event_date, batch_id
            )
            if isinstance(result, Failure):
                # Fail open: a missed duplicate is caught in review
                errors.append(result.error)
            else:
                is_duplicate = result.value

        return PreviewItem(
            record=record,
            outcome=outcome,
            is_possible_duplicate=is_duplicate,
            target_status=target_status_for(record),
            target_requested_at=target_requested_at_for(record),
            batch_id=batch_id,
            errors=errors,
        )

    async def _resolve(
        self,
        record: ExternalLeaveRecord,
        division_id: int | None,
        errors: list[str],
    ) -> MatchOutcome:
        query = self._classifier.build_query(record.given_name, record.family_name)
        if query.is_empty:
            logger.warning(
                "empty name in import record", event_date=str(record.event_date)
            )
            return Unmatched(reason="empty name")

        result = await self._search_roster(record, division_id)
        if isinstance(result, Failure):
            errors.append(result.error)
            return Unmatched(reason="roster lookup failed")

        outcome = self._classifier.evaluate(query, result.value)
        logger.debug(
            "record classified",
            name=record.display_name,
            candidates=len(result.value),
            status=outcome.status,
        )
        return outcome

    async def _search_roster(
        self,
        record: ExternalLeaveRecord,
        division_id: int | None,
    ) -> Result[list[RosterMember]]:
        try:
            members = await self._roster.search_members(
                record.given_name.strip(), record.family_name.strip(), division_id
            )
        except Exception as e:
            logger.warning(
                "roster lookup failed",
                name=record.display_name,
                division_id=division_id,
                error=str(e),
            )
            return Failure(error=f"roster lookup failed: {e}", exception=e)
        return Success(list(members))
