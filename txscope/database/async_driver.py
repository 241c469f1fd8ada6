from typing import List, Optional
from sqlalchemy import Row, text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncTransaction, create_async_engine
from txscope.exceptions import TransactionClosedError
from .base import (
    AsyncFinalizable,
    AsyncOpenable,
    AsyncRunnable,
    ExecResult,
    Params,
    Query,
    to_parameters,
    to_statement,
)


class AsyncTx(AsyncRunnable, AsyncFinalizable):
    """Asyncio open transaction: a checked-out AsyncConnection and its root transaction."""

    def __init__(self, connection: AsyncConnection, transaction: AsyncTransaction, owns_connection: bool = True):
        self.connection = connection
        self.transaction = transaction
        self._owns_connection = owns_connection
        self._done = False

    @classmethod
    def adopt(cls, connection: AsyncConnection) -> "AsyncTx":
        transaction = connection.get_transaction()
        if transaction is None:
            raise ValueError("Connection has no active transaction")
        return cls(connection, transaction, owns_connection=False)

    @property
    def closed(self) -> bool:
        return self._done

    def _check(self, operation: str) -> None:
        if self._done:
            raise TransactionClosedError(operation)

    async def exec(self, query: Query, params: Params = None) -> ExecResult:
        self._check("exec")
        result = await self.connection.execute(to_statement(query), to_parameters(params))
        return ExecResult.from_cursor(result)

    async def query(self, query: Query, params: Params = None) -> List[Row]:
        self._check("query")
        result = await self.connection.execute(to_statement(query), to_parameters(params))
        return list(result.all())

    async def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        self._check("query_one")
        result = await self.connection.execute(to_statement(query), to_parameters(params))
        return result.first()

    async def commit(self) -> None:
        self._check("commit")
        try:
            await self.transaction.commit()
        finally:
            await self._release()

    async def rollback(self) -> None:
        if self._done:
            return
        try:
            await self.transaction.rollback()
        finally:
            await self._release()

    async def _release(self) -> None:
        self._done = True
        if self._owns_connection:
            await self.connection.close()


class AsyncPool(AsyncRunnable, AsyncOpenable):
    """Pool-level handle over an AsyncEngine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, echo: bool = False, pool_pre_ping: bool = True, **kwargs) -> "AsyncPool":
        return cls(create_async_engine(url, echo=echo, pool_pre_ping=pool_pre_ping, **kwargs))

    async def connect(self):
        """Connect to database (engine manages connections)."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Disconnect from database."""
        await self.engine.dispose()

    async def begin(self) -> AsyncTx:
        connection = await self.engine.connect()
        try:
            transaction = await connection.begin()
        except Exception:
            await connection.close()
            raise
        return AsyncTx(connection, transaction)

    async def exec(self, query: Query, params: Params = None) -> ExecResult:
        async with self.engine.begin() as conn:
            result = await conn.execute(to_statement(query), to_parameters(params))
            return ExecResult.from_cursor(result)

    async def query(self, query: Query, params: Params = None) -> List[Row]:
        async with self.engine.connect() as conn:
            result = await conn.execute(to_statement(query), to_parameters(params))
            return list(result.all())

    async def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        async with self.engine.connect() as conn:
            result = await conn.execute(to_statement(query), to_parameters(params))
            return result.first()
