"""Repository for leave requests.

Answers duplicate queries for the import preview and stores the records an
operator commits. Uses SQLite (via TursoClient) for persistence.
"""

from datetime import date

from src.db.turso import BatchStatement, TursoClient
from src.importer.schemas import LeaveImportRecord


class LeaveRequestRepository:
    """Read/write access to the leave_requests table.

    Implements the LeaveRequestStore protocol used by the duplicate checker.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create leave_requests table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS leave_requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                member_id TEXT,
                employee_number INTEGER NOT NULL,
                batch_id TEXT NOT NULL,
                event_date TEXT NOT NULL,
                leave_kind TEXT NOT NULL,
                status TEXT NOT NULL,
                requested_at TEXT NOT NULL,
                import_source TEXT,
                imported_at TEXT,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_leave_requests_lookup
            ON leave_requests(batch_id, event_date)
            """,
            ]
        )

    async def has_existing_record(
        self,
        member_id_or_employee_number: str | int,
        event_date: date,
        batch_id: str,
    ) -> bool:
        """Check for a request with the same identity, date and batch.

        Args:
            member_id_or_employee_number: Internal member id (str) or
                employee number (int)
            event_date: Day of leave
            batch_id: Import batch (calendar) identifier

        Returns:
            True if at least one matching request exists
        """
        if isinstance(member_id_or_employee_number, str):
            identity_column = "member_id"
        else:
            identity_column = "employee_number"

        result = await self._db.execute(
            f"""
            SELECT 1
            FROM leave_requests
            WHERE {identity_column} = ? AND event_date = ? AND batch_id = ?
            LIMIT 1
            """,
            [member_id_or_employee_number, event_date.isoformat(), batch_id],
        )
        return len(result.rows) > 0

    async def insert_records(self, records: list[LeaveImportRecord]) -> int:
        """Insert imported leave requests in one batch.

        Args:
            records: Persistence-ready records from the selection step

        Returns:
            Number of records inserted
        """
        if not records:
            return 0

        statements: list[BatchStatement] = [
            (
                """
                INSERT INTO leave_requests
                    (member_id, employee_number, batch_id, event_date, leave_kind,
                     status, requested_at, import_source, imported_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    record.member_id,
                    record.employee_number,
                    record.batch_id,
                    record.event_date.isoformat(),
                    record.leave_kind.value,
                    record.status.value,
                    record.requested_at.isoformat(),
                    record.import_source,
                    record.imported_at.isoformat(),
                ],
            )
            for record in records
        ]
        await self._db.execute_batch(statements)
        return len(records)

    async def count_for_batch(self, batch_id: str) -> int:
        """Count stored requests in an import batch."""
        result = await self._db.execute(
            "SELECT COUNT(*) FROM leave_requests WHERE batch_id = ?",
            [batch_id],
        )
        return result.rows[0][0]
