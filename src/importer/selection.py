"""Conversion of operator-selected preview items into insert records.

Matched items import as previewed. Ambiguous and unmatched items are only
importable once an operator has chosen the member explicitly.
"""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from src.importer.schemas import LeaveImportRecord, PreviewItem
from src.matching.schemas import Matched, MultipleMatches, RosterMember

DEFAULT_IMPORT_SOURCE = "ical"


class SelectionError(ValueError):
    """A selected preview item cannot be imported as chosen."""

    def __init__(self, index: int, message: str):
        self.index = index
        super().__init__(f"item {index}: {message}")


def resolve_member(
    index: int,
    item: PreviewItem,
    choice: RosterMember | None,
) -> RosterMember:
    """Pick the member a selected item will be imported for.

    Args:
        index: Position of the item in the preview (for error messages)
        item: Preview item being imported
        choice: Operator-chosen member, if any

    Returns:
        The member to import the leave request for

    Raises:
        SelectionError: If the item is unresolved and no valid choice was made
    """
    outcome = item.outcome
    if isinstance(outcome, Matched):
        return choice or outcome.member

    if isinstance(outcome, MultipleMatches):
        if choice is None:
            raise SelectionError(index, "multiple matches, operator must pick one")
        for candidate in outcome.candidates:
            if candidate.member.employee_number == choice.employee_number:
                return candidate.member
        raise SelectionError(
            index, f"employee {choice.employee_number} is not one of the candidates"
        )

    if choice is None:
        raise SelectionError(index, "unmatched, operator must assign a member")
    return choice


def prepare_import_records(
    items: Sequence[PreviewItem],
    selected_indices: Sequence[int],
    choices: Mapping[int, RosterMember] | None = None,
    imported_at: datetime | None = None,
    import_source: str = DEFAULT_IMPORT_SOURCE,
) -> list[LeaveImportRecord]:
    """Build insert records for the selected preview items.

    Args:
        items: Full preview, index-addressable
        selected_indices: Indices of items the operator wants imported
        choices: Operator-chosen member per item index
        imported_at: Import timestamp (now, UTC, if omitted)
        import_source: Provenance tag stored on each record

    Returns:
        One LeaveImportRecord per selected index, in selection order

    Raises:
        SelectionError: For out-of-range indices or unresolved items
    """
    choices = choices or {}
    imported_at = imported_at or datetime.now(UTC)

    records: list[LeaveImportRecord] = []
    for index in selected_indices:
        if not 0 <= index < len(items):
            raise SelectionError(index, "no such preview item")
        item = items[index]
        member = resolve_member(index, item, choices.get(index))
        records.append(
            LeaveImportRecord(
                member_id=member.member_id,
                employee_number=member.employee_number,
                batch_id=item.batch_id,
                event_date=item.record.event_date,
                leave_kind=item.record.leave_kind,
                status=item.target_status,
                requested_at=item.target_requested_at,
                import_source=import_source,
                imported_at=imported_at,
            )
        )
    return records
