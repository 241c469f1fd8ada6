"""
Asyncio transactor variants; same commit ownership as the sync ones in wrappers.py.
"""

from typing import List, Optional
from sqlalchemy import Row
from txscope.database.async_driver import AsyncPool, AsyncTx
from txscope.database.base import (
    AsyncFinalizable,
    AsyncOpenable,
    AsyncRunnable,
    ExecResult,
    Params,
    Query,
)
from .wrappers import MANAGED_KINDS, TransactorKind


class AsyncTransactor(AsyncOpenable, AsyncRunnable, AsyncFinalizable):
    kind: TransactorKind

    def __init__(self, handle: AsyncRunnable):
        self._handle = handle

    @property
    def handle(self) -> AsyncRunnable:
        return self._handle

    @property
    def managed(self) -> bool:
        return self.kind in MANAGED_KINDS

    async def exec(self, query: Query, params: Params = None) -> ExecResult:
        return await self._handle.exec(query, params)

    async def query(self, query: Query, params: Params = None) -> List[Row]:
        return await self._handle.query(query, params)

    async def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        return await self._handle.query_one(query, params)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value} handle={self._handle!r}>"


class AsyncRootTransactor(AsyncTransactor):
    kind = TransactorKind.ROOT

    def __init__(self, pool: AsyncPool):
        super().__init__(pool)

    async def begin(self) -> AsyncTx:
        return await self._handle.begin()

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None


class AsyncNestableTransactor(AsyncTransactor):
    kind = TransactorKind.NESTABLE

    def __init__(self, tx: AsyncTx):
        super().__init__(tx)

    @property
    def tx(self) -> AsyncTx:
        return self._handle

    async def begin(self) -> AsyncTx:
        return self._handle

    async def commit(self) -> None:
        await self._handle.commit()

    async def rollback(self) -> None:
        await self._handle.rollback()


class AsyncNestedTransactor(AsyncTransactor):
    kind = TransactorKind.NESTED

    def __init__(self, tx: AsyncTx):
        super().__init__(tx)

    @property
    def tx(self) -> AsyncTx:
        return self._handle

    async def begin(self) -> AsyncTx:
        return self._handle

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        await self._handle.rollback()


def wrap_begun_async(handle, tx: AsyncTx) -> AsyncTransactor:
    if isinstance(handle, AsyncTransactor) and handle.managed:
        return AsyncNestedTransactor(tx)
    return AsyncNestableTransactor(tx)
