"""Database gateway, schema bootstrap and app lifespan with a mocked pool."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import main
from core import schema
from core.db import Database
from core.settings import Settings


@pytest.fixture
def pool():
    pool = MagicMock()
    pool.fetchrow = AsyncMock(return_value={"id": 1, "name": "Ann"})
    pool.fetch = AsyncMock(return_value=[{"id": 1}, {"id": 2}])
    pool.execute = AsyncMock(return_value="CREATE TABLE")
    pool.close = AsyncMock()
    return pool


@pytest.fixture
def database(pool):
    with patch("core.db.asyncpg.create_pool", AsyncMock(return_value=pool)) as create_pool:
        db = Database("postgresql://u:p@db/app", min_size=2, max_size=7, command_timeout=12)
        db.create_pool_mock = create_pool
        yield db


class TestDatabase:
    async def test_pool_before_connect_raises(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            Database("postgresql://u:p@db/app").pool()

    async def test_connect_uses_configured_sizes(self, database):
        await database.connect()

        database.create_pool_mock.assert_awaited_once_with(
            dsn="postgresql://u:p@db/app",
            min_size=2,
            max_size=7,
            command_timeout=12,
        )
        assert database.is_connected

    async def test_connect_is_idempotent(self, database):
        await database.connect()
        await database.connect()

        assert database.create_pool_mock.await_count == 1

    async def test_fetch_one_passes_positional_args(self, database, pool):
        await database.connect()

        row = await database.fetch_one("SELECT * FROM users WHERE id = $1", 1)

        pool.fetchrow.assert_awaited_once_with("SELECT * FROM users WHERE id = $1", 1)
        assert row == {"id": 1, "name": "Ann"}

    async def test_fetch_one_none(self, database, pool):
        pool.fetchrow.return_value = None
        await database.connect()

        assert await database.fetch_one("SELECT 1") is None

    async def test_fetch_all(self, database):
        await database.connect()

        assert await database.fetch_all("SELECT * FROM users") == [{"id": 1}, {"id": 2}]

    async def test_close(self, database, pool):
        await database.connect()
        await database.close()
        await database.close()

        pool.close.assert_awaited_once()
        assert not database.is_connected


async def test_init_schema_creates_users_then_todos():
    database = MagicMock()
    database.execute = AsyncMock()

    await schema.init_schema(database)

    statements = [call.args[0] for call in database.execute.await_args_list]
    assert len(statements) == 2
    assert "CREATE TABLE IF NOT EXISTS users" in statements[0]
    assert "email VARCHAR(150) UNIQUE NOT NULL" in statements[0]
    assert "CREATE TABLE IF NOT EXISTS todos" in statements[1]
    assert "REFERENCES users(id) ON DELETE CASCADE" in statements[1]


class FakeDatabase:
    instances: list["FakeDatabase"] = []

    def __init__(self, dsn, **kwargs):
        self.dsn = dsn
        self.kwargs = kwargs
        self.connected = False
        self.executed: list[str] = []
        FakeDatabase.instances.append(self)

    async def connect(self):
        self.connected = True

    async def close(self):
        self.connected = False

    async def execute(self, sql, *args):
        self.executed.append(sql)
        return "CREATE TABLE"


class TestLifespan:
    @pytest.fixture(autouse=True)
    def fake_database(self):
        FakeDatabase.instances.clear()
        with patch.object(main, "Database", FakeDatabase):
            yield

    async def test_missing_database_url_fails_startup(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        app = main.create_app()

        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            async with main.lifespan(app):
                pass

    async def test_opens_pool_bootstraps_and_closes(self):
        app = main.create_app(Settings(database_url="postgresql://u:p@db/app", pool_max_size=9))

        async with main.lifespan(app):
            database = app.state.database
            assert database.connected
            assert database.kwargs["max_size"] == 9
            assert len(database.executed) == 2

        assert not database.connected
        assert app.state.database is None

    async def test_bootstrap_can_be_disabled(self):
        app = main.create_app(Settings(database_url="postgresql://u:p@db/app", bootstrap_schema=False))

        async with main.lifespan(app):
            assert app.state.database.executed == []
