"""Tests for TursoClient."""

from pathlib import Path

import pytest

from src.db.turso import TursoClient


@pytest.fixture
def client(tmp_path: Path) -> TursoClient:
    """Create an unconnected client over a temp file database."""
    return TursoClient(url=f"file:{tmp_path / 'test_leave_import.db'}")


async def test_connect_and_close(client: TursoClient):
    assert not client.is_connected

    await client.connect()
    assert client.is_connected
    assert await client.is_healthy()

    await client.close()
    assert not client.is_connected
    assert not await client.is_healthy()


async def test_connect_twice_keeps_connection(client: TursoClient):
    await client.connect()
    first = client._client
    await client.connect()

    assert client._client is first
    await client.close()


async def test_execute_requires_connection(client: TursoClient):
    with pytest.raises(RuntimeError, match="not connected"):
        await client.execute("SELECT 1")


async def test_execute_batch_applies_all_statements(client: TursoClient):
    await client.connect()
    await client.execute_batch(
        [
            "CREATE TABLE t (n INTEGER)",
            ("INSERT INTO t (n) VALUES (?)", [1]),
            ("INSERT INTO t (n) VALUES (?)", [2]),
        ]
    )

    result = await client.execute("SELECT COUNT(*) FROM t")
    assert result.rows[0][0] == 2
    await client.close()


async def test_close_when_not_connected(client: TursoClient):
    await client.close()
    assert not client.is_connected
