"""Repository for the member roster.

Serves the loose name search used to fetch match candidates for imported
leave records. Uses SQLite (via TursoClient) for persistence.
"""

from typing import Any

from src.db.turso import TursoClient
from src.matching.nicknames import NicknameResolver
from src.matching.schemas import MemberStatus, RosterMember

_MEMBER_COLUMNS = (
    "member_id, employee_number, given_name, family_name, status, division_id"
)


def _like_pattern(fragment: str) -> str:
    """Substring LIKE pattern with %, _ and the escape char escaped."""
    escaped = (
        fragment.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def _row_to_member(row: Any) -> RosterMember:
    return RosterMember(
        member_id=row[0],
        employee_number=row[1],
        given_name=row[2],
        family_name=row[3],
        status=MemberStatus(row[4]) if row[4] else MemberStatus.ACTIVE,
        division_id=row[5],
    )


class RosterRepository:
    """Read/write access to the members table.

    Implements the RosterQuery protocol used by the import pipeline.
    """

    def __init__(
        self,
        db_client: TursoClient,
        nicknames: NicknameResolver | None = None,
    ):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
            nicknames: When given, searches also match nickname variants
                       of the given name (Mike finds Michael)
        """
        self._db = db_client
        self._nicknames = nicknames

    async def initialize(self) -> None:
        """Create members table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS members (
                employee_number INTEGER PRIMARY KEY,
                member_id TEXT UNIQUE,
                given_name TEXT,
                family_name TEXT,
                status TEXT NOT NULL DEFAULT 'active',
                division_id INTEGER
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_members_division
            ON members(division_id)
            """,
            ]
        )

    async def add_member(self, member: RosterMember) -> None:
        """Insert or replace a roster member (keyed by employee number)."""
        await self._db.execute(
            """
            INSERT INTO members
                (employee_number, member_id, given_name, family_name,
                 status, division_id)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(employee_number)
            DO UPDATE SET
                member_id = excluded.member_id,
                given_name = excluded.given_name,
                family_name = excluded.family_name,
                status = excluded.status,
                division_id = excluded.division_id
            """,
            [
                member.employee_number,
                member.member_id,
                member.given_name,
                member.family_name,
                member.status.value,
                member.division_id,
            ],
        )

    async def get_by_employee_number(
        self, employee_number: int
    ) -> RosterMember | None:
        """Get a member by employee number.

        Returns:
            RosterMember or None if not found
        """
        result = await self._db.execute(
            f"SELECT {_MEMBER_COLUMNS} FROM members WHERE employee_number = ?",
            [employee_number],
        )
        if result.rows:
            return _row_to_member(result.rows[0])
        return None

    async def search_members(
        self,
        given_fragment: str,
        family_fragment: str,
        division_id: int | None = None,
    ) -> list[RosterMember]:
        """Find members whose family or given name contains a fragment.

        The family name is the primary filter; the given name (and its
        nickname variants) widens the search. Matching is case-insensitive.

        Args:
            given_fragment: Given name text from the import
            family_fragment: Family name text from the import
            division_id: Optional division to restrict the search to

        Returns:
            Matching members ordered by employee number; empty if both
            fragments are blank
        """
        given_fragment = given_fragment.strip()
        family_fragment = family_fragment.strip()

        clauses: list[str] = []
        params: list[Any] = []
        if family_fragment:
            clauses.append("lower(family_name) LIKE ? ESCAPE '\\'")
            params.append(_like_pattern(family_fragment))
        for given in self._given_fragments(given_fragment):
            clauses.append("lower(given_name) LIKE ? ESCAPE '\\'")
            params.append(_like_pattern(given))

        if not clauses:
            return []

        sql = f"SELECT {_MEMBER_COLUMNS} FROM members WHERE ({' OR '.join(clauses)})"
        if division_id is not None:
            sql += " AND division_id = ?"
            params.append(division_id)
        sql += " ORDER BY employee_number"

        result = await self._db.execute(sql, params)
        return [_row_to_member(row) for row in result.rows]

    def _given_fragments(self, given_fragment: str) -> list[str]:
        if not given_fragment:
            return []
        if self._nicknames is None:
            return [given_fragment]
        variants = self._nicknames.variants_of(given_fragment.lower())
        return sorted(variants)
