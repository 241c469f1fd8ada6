"""
Unit of Work: context-manager form of run(), with repositories sharing the scope.
"""

from typing import Optional
from txscope.database.base import AsyncOpenable, Openable
from txscope.transaction.async_orchestrator import abegin_scope, arollback_quietly
from txscope.transaction.async_wrappers import AsyncTransactor
from txscope.transaction.orchestrator import begin_scope, rollback_quietly
from txscope.transaction.wrappers import Transactor


class UnitOfWork:
    """Opens (or joins) a transaction on enter; rolls back on error, commits on clean exit."""

    def __init__(self, handle: Openable):
        """handle is a Pool or a transactor from an enclosing scope."""
        if handle is None:
            raise ValueError("Handle must be provided (a Pool or an enclosing transactor).")

        self.handle = handle
        self.transactor: Optional[Transactor] = None
        self._finalized = False
        self._repositories = {}

    def get_repository(self, repo_class):
        """Get or create a repository instance bound to this scope (cached)."""
        if self.transactor is None:
            raise RuntimeError("UnitOfWork is not active; use it as a context manager.")
        cache_key = repo_class.__name__
        if cache_key not in self._repositories:
            self._repositories[cache_key] = repo_class(self.transactor)
        return self._repositories[cache_key]

    def commit(self) -> None:
        """Commit (a no-op unless this is the outermost scope); exit then leaves the scope alone."""
        self._finalized = True
        self.transactor.commit()

    def rollback(self) -> None:
        """Rollback all changes, including those of enclosing scopes."""
        self._finalized = True
        self.transactor.rollback()

    def __enter__(self) -> "UnitOfWork":
        self.transactor = begin_scope(self.handle)
        self._finalized = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            # Already finalized by an explicit commit() or rollback()
            if self._finalized:
                return False
            if exc_type is not None:
                rollback_quietly(self.transactor, exc_val)
            else:
                self.commit()
        finally:
            self._repositories.clear()
        return False


class AsyncUnitOfWork:
    """Asyncio counterpart of UnitOfWork."""

    def __init__(self, handle: AsyncOpenable):
        if handle is None:
            raise ValueError("Handle must be provided (an AsyncPool or an enclosing transactor).")

        self.handle = handle
        self.transactor: Optional[AsyncTransactor] = None
        self._finalized = False
        self._repositories = {}

    def get_repository(self, repo_class):
        if self.transactor is None:
            raise RuntimeError("AsyncUnitOfWork is not active; use it as an async context manager.")
        cache_key = repo_class.__name__
        if cache_key not in self._repositories:
            self._repositories[cache_key] = repo_class(self.transactor)
        return self._repositories[cache_key]

    async def commit(self) -> None:
        self._finalized = True
        await self.transactor.commit()

    async def rollback(self) -> None:
        self._finalized = True
        await self.transactor.rollback()

    async def __aenter__(self) -> "AsyncUnitOfWork":
        self.transactor = await abegin_scope(self.handle)
        self._finalized = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            # Already finalized by an explicit commit() or rollback()
            if self._finalized:
                return False
            if exc_type is not None:
                await arollback_quietly(self.transactor, exc_val)
            else:
                await self.commit()
        finally:
            self._repositories.clear()
        return False
