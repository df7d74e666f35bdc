"""Leave import API endpoints.

Provides the preview step (match imported names to the roster, flag possible
duplicates) and the operator's prepare/commit steps for selected items.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, Field

from src.config import settings
from src.importer.preview_service import ImportPreviewService
from src.importer.schemas import ExternalLeaveRecord, LeaveImportRecord, PreviewItem
from src.importer.selection import SelectionError, prepare_import_records
from src.matching.schemas import (
    MatchCandidate,
    MatchStatus,
    MultipleMatches,
    RosterMember,
)
from src.repositories.leave_request_repo import LeaveRequestRepository
from src.repositories.roster_repo import RosterRepository

logger = structlog.get_logger()

router = APIRouter(prefix="/imports", tags=["imports"])


class PreviewRequest(BaseModel):
    """Batch of parsed calendar records to preview."""

    batch_id: str = Field(description="Import batch (calendar) identifier")
    division_id: int | None = Field(
        default=None, description="Division to scope roster searches to"
    )
    records: list[ExternalLeaveRecord] = Field(description="Parsed leave records")


class PreviewSummary(BaseModel):
    """Counts per match status for the review screen."""

    total: int
    matched: int
    multiple_matches: int
    unmatched: int
    possible_duplicates: int


class PreviewResponse(BaseModel):
    """Preview items in input order plus a summary."""

    items: list[PreviewItem]
    summary: PreviewSummary


class SelectionRequest(BaseModel):
    """Operator selection over a previously generated preview."""

    items: list[PreviewItem] = Field(description="Preview as returned by /preview")
    selected_indices: list[int] = Field(description="Items to import")
    choices: dict[int, int] = Field(
        default_factory=dict,
        description="Operator-chosen employee number per item index",
    )


class PrepareResponse(BaseModel):
    """Insert records for the selected items (nothing written)."""

    records: list[LeaveImportRecord]


class MemberSearchResponse(BaseModel):
    """Ranked roster candidates for a typed name."""

    candidates: list[MatchCandidate] = Field(
        description="Members above the confidence floor, best first"
    )


class CommitResponse(BaseModel):
    """Result of committing selected items."""

    inserted: int


def _from_state(request: Request, name: str, label: str):
    app = request.app
    if not hasattr(app.state, name):
        raise HTTPException(
            status_code=503,
            detail=f"{label} not initialized",
        )
    return getattr(app.state, name)


def get_import_preview_service(request: Request) -> ImportPreviewService:
    """Dependency to get ImportPreviewService from app state."""
    return _from_state(request, "import_preview_service", "ImportPreviewService")


def get_roster_repo(request: Request) -> RosterRepository:
    """Dependency to get RosterRepository from app state."""
    return _from_state(request, "roster_repo", "Roster database")


def get_leave_request_repo(request: Request) -> LeaveRequestRepository:
    """Dependency to get LeaveRequestRepository from app state."""
    return _from_state(request, "leave_request_repo", "Leave request database")


def summarize(items: list[PreviewItem]) -> PreviewSummary:
    """Count preview items per match status."""
    statuses = [item.match_status for item in items]
    return PreviewSummary(
        total=len(items),
        matched=statuses.count(MatchStatus.MATCHED),
        multiple_matches=statuses.count(MatchStatus.MULTIPLE_MATCHES),
        unmatched=statuses.count(MatchStatus.UNMATCHED),
        possible_duplicates=sum(1 for item in items if item.is_possible_duplicate),
    )


async def _resolve_choices(
    request: SelectionRequest,
    roster_repo: RosterRepository,
) -> dict[int, RosterMember]:
    """Turn chosen employee numbers into roster members.

    Candidates already in the preview are used as-is; anything else
    (manual assignment of an unmatched item) is looked up in the roster.
    """
    resolved: dict[int, RosterMember] = {}
    for index, employee_number in request.choices.items():
        member = None
        if 0 <= index < len(request.items):
            outcome = request.items[index].outcome
            if isinstance(outcome, MultipleMatches):
                member = next(
                    (
                        c.member
                        for c in outcome.candidates
                        if c.member.employee_number == employee_number
                    ),
                    None,
                )
        if member is None:
            member = await roster_repo.get_by_employee_number(employee_number)
        if member is None:
            raise HTTPException(
                status_code=422,
                detail=f"item {index}: employee {employee_number} not in roster",
            )
        resolved[index] = member
    return resolved


async def _prepare(
    request: SelectionRequest,
    roster_repo: RosterRepository,
) -> list[LeaveImportRecord]:
    choices = await _resolve_choices(request, roster_repo)
    try:
        return prepare_import_records(
            request.items,
            request.selected_indices,
            choices=choices,
            import_source=settings.import_source_tag,
        )
    except SelectionError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/preview", response_model=PreviewResponse)
async def preview_import(
    request: PreviewRequest,
    service: ImportPreviewService = Depends(get_import_preview_service),
) -> PreviewResponse:
    """Match each record to the roster and flag possible duplicates.

    Matched items can be imported directly; MultipleMatches and Unmatched
    items need an operator choice before they can be committed.

    Args:
        request: Batch id, optional division and parsed records
        service: Import preview service

    Returns:
        PreviewResponse with one item per record, in input order
    """
    items = await service.generate_preview(
        request.records,
        batch_id=request.batch_id,
        division_id=request.division_id,
    )
    return PreviewResponse(items=items, summary=summarize(items))


@router.get("/members/search", response_model=MemberSearchResponse)
async def search_members(
    given: str = Query(default="", description="First name to look for"),
    family: str = Query(default="", description="Last name to look for"),
    division_id: int | None = Query(default=None, description="Division scope"),
    service: ImportPreviewService = Depends(get_import_preview_service),
) -> MemberSearchResponse:
    """Search the roster by name to resolve an ambiguous or unmatched item.

    The returned employee numbers are what /prepare and /commit accept as
    operator choices.
    """
    try:
        candidates = await service.find_members(given, family, division_id)
    except Exception as e:
        logger.error("member search failed", given=given, family=family, error=str(e))
        raise HTTPException(status_code=502, detail="Roster lookup failed") from e
    return MemberSearchResponse(candidates=candidates)


@router.post("/prepare", response_model=PrepareResponse)
async def prepare_import(
    request: SelectionRequest,
    roster_repo: RosterRepository = Depends(get_roster_repo),
) -> PrepareResponse:
    """Build insert records for the selected items without writing them."""
    return PrepareResponse(records=await _prepare(request, roster_repo))


@router.post("/commit", response_model=CommitResponse)
async def commit_import(
    request: SelectionRequest,
    roster_repo: RosterRepository = Depends(get_roster_repo),
    leave_repo: LeaveRequestRepository = Depends(get_leave_request_repo),
) -> CommitResponse:
    """Insert the selected items as leave requests."""
    records = await _prepare(request, roster_repo)
    inserted = await leave_repo.insert_records(records)
    logger.info(
        "import committed",
        inserted=inserted,
        batch_ids=sorted({r.batch_id for r in records}),
    )
    return CommitResponse(inserted=inserted)
