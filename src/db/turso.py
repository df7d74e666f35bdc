"""libSQL connection shared by the roster and leave-request repositories.

The members and leave_requests tables live in one database: a Turso cloud
database in deployment, a local SQLite file in development and tests.
"""

import logging
from typing import Any

from libsql_client import Client, ResultSet, create_client

from src.config import settings

logger = logging.getLogger(__name__)

# A bare SQL string, or SQL with its ? parameters
BatchStatement = str | tuple[str, list[Any]]


class TursoClient:
    """Async libSQL connection owned by the application lifespan.

    Repositories receive one instance and issue parameterized statements
    through ``execute`` (lookups such as roster search and duplicate checks)
    or ``execute_batch`` (table setup, committing a selection of imports).
    """

    def __init__(
        self,
        url: str | None = None,
        auth_token: str | None = None,
    ):
        """Initialize client with connection parameters.

        Args:
            url: ``libsql://`` database or ``file:`` path. Falls back to
                 settings, then to a local leave_import.db file.
            auth_token: Turso token, only used for ``libsql://`` URLs
        """
        self.url = url or settings.turso_database_url or "file:leave_import.db"
        self.auth_token = auth_token or settings.turso_auth_token
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the connection; a second call is a no-op."""
        if self.is_connected:
            return

        if self.auth_token and self.url.startswith("libsql://"):
            self._client = create_client(url=self.url, auth_token=self.auth_token)
        else:
            self._client = create_client(url=self.url)

        logger.info(f"Leave import database connected: {self.url}")

    def _require_client(self) -> Client:
        if self._client is None:
            msg = "Leave import database is not connected; call connect() first"
            raise RuntimeError(msg)
        return self._client

    async def execute(
        self,
        sql: str,
        params: list[Any] | None = None,
    ) -> ResultSet:
        """Run one statement.

        Args:
            sql: SQL with ? placeholders
            params: Positional values for the placeholders

        Returns:
            ResultSet whose rows index like tuples
        """
        return await self._require_client().execute(sql, params or [])

    async def execute_batch(self, statements: list[BatchStatement]) -> list[ResultSet]:
        """Run several statements in one transaction.

        Either every statement applies or none does, so a committed
        selection of leave requests is never half-written.

        Args:
            statements: SQL strings or (sql, params) tuples

        Returns:
            One ResultSet per statement
        """
        return await self._require_client().batch(statements)

    async def close(self) -> None:
        if not self.is_connected:
            return
        await self._client.close()
        self._client = None
        logger.info("Leave import database closed")

    async def is_healthy(self) -> bool:
        """Round-trip a trivial query; False when disconnected or failing."""
        if not self.is_connected:
            return False
        try:
            result = await self._client.execute("SELECT 1")
        except Exception:
            logger.warning("Leave import database health check failed", exc_info=True)
            return False
        return len(result.rows) == 1
