"""Import pipeline schemas.

Defines external leave records (as parsed from a calendar export), the
preview items shown for review, and the insert records produced once an
operator has selected what to import.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.matching.schemas import Matched, MatchOutcome, MatchStatus


class LeaveKind(str, Enum):
    """Single-day leave categories."""

    PLD = "PLD"  # personal leave day
    SDV = "SDV"  # single-day vacation


class TargetStatus(str, Enum):
    """Status the imported leave request will be created with."""

    APPROVED = "approved"
    WAITLISTED = "waitlisted"


class ExternalLeaveRecord(BaseModel):
    """One leave event parsed from an external calendar export.

    Names are free text as transcribed by whoever kept the calendar.
    """

    model_config = ConfigDict(frozen=True)

    given_name: str = Field(default="", description="First name as written")
    family_name: str = Field(default="", description="Last name as written")
    event_date: date = Field(description="Day of leave")
    leave_kind: LeaveKind = Field(description="Leave category")
    is_waitlisted: bool = Field(default=False, description="Queued behind others")
    created_at: datetime = Field(description="When the calendar entry was created")
    original_request_date: datetime | None = Field(
        default=None,
        description="Original request time, when the source preserved it",
    )

    @property
    def display_name(self) -> str:
        return f"{self.given_name} {self.family_name}".strip()


class PreviewItem(BaseModel):
    """Proposed, not yet committed, import of one external record."""

    record: ExternalLeaveRecord
    outcome: MatchOutcome
    is_possible_duplicate: bool = Field(
        default=False,
        description="A request for this member, date and batch already exists",
    )
    target_status: TargetStatus
    target_requested_at: datetime
    batch_id: str = Field(description="Import batch (calendar) identifier")
    errors: list[str] = Field(
        default_factory=list,
        description="Lookups that failed while building this item",
    )

    @property
    def is_resolved(self) -> bool:
        """True when the record resolved to a single member."""
        return isinstance(self.outcome, Matched)

    @property
    def match_status(self) -> MatchStatus:
        return MatchStatus(self.outcome.status)


class LeaveImportRecord(BaseModel):
    """Persistence-ready leave request produced from a selected preview item."""

    member_id: str | None = Field(default=None, description="Internal member id")
    employee_number: int = Field(description="Stable employee (PIN) number")
    batch_id: str = Field(description="Import batch (calendar) identifier")
    event_date: date
    leave_kind: LeaveKind
    status: TargetStatus
    requested_at: datetime
    import_source: str = Field(default="ical", description="Import provenance tag")
    imported_at: datetime
