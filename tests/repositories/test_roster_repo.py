"""Tests for RosterRepository."""

from pathlib import Path

import pytest

from src.db.turso import TursoClient
from src.matching.nicknames import NicknameResolver
from src.matching.schemas import MemberStatus, RosterMember
from src.repositories.roster_repo import RosterRepository


@pytest.fixture
async def db_client(tmp_path: Path):
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_roster.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def repo(db_client: TursoClient, roster: list[RosterMember], make_member):
    """Create RosterRepository seeded with the sample roster in division 7."""
    repo = RosterRepository(db_client)
    await repo.initialize()
    for member in roster:
        await repo.add_member(member.model_copy(update={"division_id": 7}))
    await repo.add_member(make_member(2001, "Nathan", "Wilson", division_id=9))
    return repo


async def test_initialize_creates_table(db_client: TursoClient):
    """Initialize should create the members table."""
    await RosterRepository(db_client).initialize()

    result = await db_client.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='members'"
    )
    assert len(result.rows) == 1


async def test_initialize_is_idempotent(db_client: TursoClient):
    repo = RosterRepository(db_client)
    await repo.initialize()
    await repo.initialize()


async def test_get_by_employee_number(repo: RosterRepository):
    member = await repo.get_by_employee_number(1001)

    assert member is not None
    assert member.member_id == "m-1001"
    assert member.given_name == "Nathan"
    assert member.family_name == "Wilbur"
    assert member.status == MemberStatus.ACTIVE
    assert member.division_id == 7


async def test_get_missing_member(repo: RosterRepository):
    assert await repo.get_by_employee_number(9999) is None


async def test_add_member_upserts(repo: RosterRepository, make_member):
    """Re-adding an employee number replaces the row."""
    await repo.add_member(
        make_member(1003, "Karen", "Carlson", member_id="m-1003", division_id=7)
    )

    member = await repo.get_by_employee_number(1003)

    assert member.family_name == "Carlson"
    assert member.member_id == "m-1003"


async def test_search_by_family_fragment(repo: RosterRepository):
    """Family name matching is case-insensitive substring."""
    members = await repo.search_members("", "SMITH")
    assert [m.employee_number for m in members] == [1005]


async def test_search_widens_on_given_name(repo: RosterRepository):
    """A misspelled surname still finds members through the given name."""
    members = await repo.search_members("Karen", "Carlson")
    assert [m.employee_number for m in members] == [1003]


async def test_search_scoped_to_division(repo: RosterRepository):
    members = await repo.search_members("Nathan", "", division_id=9)
    assert [m.employee_number for m in members] == [2001]


async def test_search_all_divisions(repo: RosterRepository):
    members = await repo.search_members("Nathan", "")
    assert [m.employee_number for m in members] == [1001, 2001]


async def test_search_blank_fragments(repo: RosterRepository):
    assert await repo.search_members("  ", "") == []


async def test_search_escapes_wildcards(repo: RosterRepository):
    """LIKE wildcards in the input are matched literally."""
    assert await repo.search_members("", "%") == []
    assert await repo.search_members("_", "") == []


async def test_search_with_nickname_variants(db_client: TursoClient, roster):
    """With a resolver, Mike also finds Michael."""
    repo = RosterRepository(db_client, nicknames=NicknameResolver())
    await repo.initialize()
    for member in roster:
        await repo.add_member(member)

    members = await repo.search_members("Mike", "Zimmerman")

    assert [m.employee_number for m in members] == [1002, 1005]


async def test_search_without_nickname_variants(repo: RosterRepository):
    assert await repo.search_members("Mike", "Zimmerman") == []
