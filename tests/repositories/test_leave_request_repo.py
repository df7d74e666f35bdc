"""Tests for LeaveRequestRepository."""

from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from src.db.turso import TursoClient
from src.importer.schemas import LeaveImportRecord, LeaveKind, TargetStatus
from src.repositories.leave_request_repo import LeaveRequestRepository


@pytest.fixture
async def db_client(tmp_path: Path):
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_leave_requests.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def repo(db_client: TursoClient):
    """Create LeaveRequestRepository with initialized table."""
    repo = LeaveRequestRepository(db_client)
    await repo.initialize()
    return repo


def import_record(
    employee_number: int = 1001,
    member_id: str | None = "m-1001",
    event_date: date = date(2025, 3, 14),
    batch_id: str = "cal-1",
) -> LeaveImportRecord:
    return LeaveImportRecord(
        member_id=member_id,
        employee_number=employee_number,
        batch_id=batch_id,
        event_date=event_date,
        leave_kind=LeaveKind.SDV,
        status=TargetStatus.APPROVED,
        requested_at=datetime(2025, 1, 10, 9, 30),
        imported_at=datetime(2025, 2, 1, 12, 0, tzinfo=UTC),
    )


async def test_initialize_creates_table(db_client: TursoClient):
    """Initialize should create the leave_requests table."""
    await LeaveRequestRepository(db_client).initialize()

    result = await db_client.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='leave_requests'"
    )
    assert len(result.rows) == 1


async def test_insert_records(repo: LeaveRequestRepository):
    inserted = await repo.insert_records(
        [import_record(), import_record(1003, None, date(2025, 3, 15))]
    )

    assert inserted == 2
    assert await repo.count_for_batch("cal-1") == 2
    assert await repo.count_for_batch("cal-2") == 0


async def test_insert_nothing(repo: LeaveRequestRepository):
    assert await repo.insert_records([]) == 0


async def test_insert_stores_columns(
    repo: LeaveRequestRepository, db_client: TursoClient
):
    await repo.insert_records([import_record()])

    result = await db_client.execute(
        "SELECT event_date, leave_kind, status, import_source FROM leave_requests"
    )
    row = result.rows[0]
    assert row[0] == "2025-03-14"
    assert row[1] == "SDV"
    assert row[2] == "approved"
    assert row[3] == "ical"


class TestHasExistingRecord:
    """Tests for has_existing_record."""

    @pytest.fixture(autouse=True)
    async def seed(self, repo: LeaveRequestRepository):
        await repo.insert_records([import_record(), import_record(1003, None)])

    async def test_match_by_member_id(self, repo: LeaveRequestRepository):
        assert await repo.has_existing_record("m-1001", date(2025, 3, 14), "cal-1")

    async def test_match_by_employee_number(self, repo: LeaveRequestRepository):
        assert await repo.has_existing_record(1003, date(2025, 3, 14), "cal-1")

    async def test_different_date(self, repo: LeaveRequestRepository):
        assert not await repo.has_existing_record(
            "m-1001", date(2025, 3, 15), "cal-1"
        )

    async def test_different_batch(self, repo: LeaveRequestRepository):
        assert not await repo.has_existing_record(
            "m-1001", date(2025, 3, 14), "cal-2"
        )

    async def test_different_member(self, repo: LeaveRequestRepository):
        assert not await repo.has_existing_record(
            "m-1002", date(2025, 3, 14), "cal-1"
        )
        assert not await repo.has_existing_record(1002, date(2025, 3, 14), "cal-1")
