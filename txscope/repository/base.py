"""
Repository base classes: table CRUD over any handle a caller passes in.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar
from sqlalchemy import Row, Table, delete, func, insert, select
from txscope.database.base import ExecResult, Params, Query
from txscope.transaction.async_orchestrator import arun
from txscope.transaction.orchestrator import run

T = TypeVar("T")


def _filtered(statement, table: Table, filters: Dict[str, Any]):
    for key, value in filters.items():
        if key in table.c:
            statement = statement.where(table.c[key] == value)
    return statement


class BaseRepository:
    """
    Generic repository over a Pool or a transactor.

    Handed a pool, every call runs on its own and in_transaction() opens a new
    transaction. Handed the transactor of an enclosing action, every call
    joins that transaction and in_transaction() nests inside it.
    """

    def __init__(self, handle, table: Optional[Table] = None):
        """Initialize repository with a handle and an optional table."""
        self.handle = handle
        self.table = table

    def in_transaction(self, action: Callable[[Any], T]) -> T:
        """Run action(transactor) in this repository's transaction scope."""
        return run(self.handle, action)

    def execute(self, query: Query, params: Params = None) -> ExecResult:
        return self.handle.exec(query, params)

    def fetch_one(self, query: Query, params: Params = None) -> Optional[Row]:
        return self.handle.query_one(query, params)

    def fetch_all(self, query: Query, params: Params = None) -> List[Row]:
        return self.handle.query(query, params)

    def _require_table(self) -> Table:
        if self.table is None:
            raise RuntimeError(f"{type(self).__name__} has no table bound")
        return self.table

    def get_by_id(self, id: Any) -> Optional[Row]:
        """Get row by primary key column `id`."""
        table = self._require_table()
        return self.fetch_one(select(table).where(table.c.id == id))

    def find_one(self, **filters) -> Optional[Row]:
        """Find one row by column filters (e.g. name='admin'); unknown columns are ignored."""
        table = self._require_table()
        return self.fetch_one(_filtered(select(table), table, filters).limit(1))

    def find_all(self, limit: int = 100, offset: int = 0, **filters) -> List[Row]:
        table = self._require_table()
        statement = _filtered(select(table), table, filters).limit(limit).offset(offset)
        return self.fetch_all(statement)

    def count(self, **filters) -> int:
        table = self._require_table()
        row = self.fetch_one(_filtered(select(func.count()).select_from(table), table, filters))
        return row[0]

    def create(self, **values) -> ExecResult:
        return self.execute(insert(self._require_table()).values(**values))

    def delete(self, id: Any) -> bool:
        """Delete row by id; True when a row was removed."""
        table = self._require_table()
        result = self.execute(delete(table).where(table.c.id == id))
        return result.rows_affected > 0


class AsyncBaseRepository:
    """Asyncio counterpart of BaseRepository over an AsyncPool or an async transactor."""

    def __init__(self, handle, table: Optional[Table] = None):
        self.handle = handle
        self.table = table

    async def in_transaction(self, action: Callable[[Any], Awaitable[T]]) -> T:
        return await arun(self.handle, action)

    async def execute(self, query: Query, params: Params = None) -> ExecResult:
        return await self.handle.exec(query, params)

    async def fetch_one(self, query: Query, params: Params = None) -> Optional[Row]:
        return await self.handle.query_one(query, params)

    async def fetch_all(self, query: Query, params: Params = None) -> List[Row]:
        return await self.handle.query(query, params)

    def _require_table(self) -> Table:
        if self.table is None:
            raise RuntimeError(f"{type(self).__name__} has no table bound")
        return self.table

    async def get_by_id(self, id: Any) -> Optional[Row]:
        table = self._require_table()
        return await self.fetch_one(select(table).where(table.c.id == id))

    async def find_one(self, **filters) -> Optional[Row]:
        table = self._require_table()
        return await self.fetch_one(_filtered(select(table), table, filters).limit(1))

    async def find_all(self, limit: int = 100, offset: int = 0, **filters) -> List[Row]:
        table = self._require_table()
        statement = _filtered(select(table), table, filters).limit(limit).offset(offset)
        return await self.fetch_all(statement)

    async def count(self, **filters) -> int:
        table = self._require_table()
        row = await self.fetch_one(_filtered(select(func.count()).select_from(table), table, filters))
        return row[0]

    async def create(self, **values) -> ExecResult:
        return await self.execute(insert(self._require_table()).values(**values))

    async def delete(self, id: Any) -> bool:
        table = self._require_table()
        result = await self.execute(delete(table).where(table.c.id == id))
        return result.rows_affected > 0
