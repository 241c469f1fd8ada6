"""Test config and shared fixtures."""
import pytest
from typing import AsyncGenerator, Generator
from unittest.mock import MagicMock
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine
from sqlalchemy.ext.asyncio import create_async_engine

from txscope.database.async_driver import AsyncPool, AsyncTx
from txscope.database.manager import DatabaseManager
from txscope.database.sql_driver import Pool, Tx


metadata = MetaData()

items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(50), nullable=False),
)


@pytest.fixture
def fake_tx() -> MagicMock:
    """Transaction handle that records commit/rollback calls."""
    return MagicMock(spec=Tx, name="tx")


@pytest.fixture
def fake_pool(fake_tx: MagicMock) -> MagicMock:
    """Pool handle whose begin() always opens `fake_tx` (counts physical begins)."""
    pool = MagicMock(spec=Pool, name="pool")
    pool.begin.return_value = fake_tx
    return pool


@pytest.fixture
def async_fake_tx() -> MagicMock:
    # spec'd MagicMock turns coroutine methods into AsyncMocks
    return MagicMock(spec=AsyncTx, name="async_tx")


@pytest.fixture
def async_fake_pool(async_fake_tx: MagicMock) -> MagicMock:
    pool = MagicMock(spec=AsyncPool, name="async_pool")
    pool.begin.return_value = async_fake_tx
    return pool


@pytest.fixture
def items_table() -> Table:
    return items


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "txscope_test.db"


@pytest.fixture
def pool(db_path) -> Generator[Pool, None, None]:
    """Pool over a file-backed SQLite database with an empty `items` table."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    metadata.create_all(engine)
    pool = Pool(engine)
    yield pool
    engine.dispose()


@pytest.fixture
async def async_pool(db_path) -> AsyncGenerator[AsyncPool, None]:
    """AsyncPool (aiosqlite) over a file-backed SQLite database with an empty `items` table."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    pool = AsyncPool(engine)
    yield pool
    await engine.dispose()


@pytest.fixture(autouse=True)
def reset_database_manager():
    """Each test gets a fresh DatabaseManager singleton."""
    DatabaseManager.reset_instance()
    yield
    DatabaseManager.reset_instance()


@pytest.fixture
def committed_names(pool: Pool):
    """Names currently committed in `items`, read through a fresh connection."""
    def _names():
        return [row.name for row in pool.query("SELECT name FROM items ORDER BY id")]
    return _names
