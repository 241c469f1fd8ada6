"""
Transactor variants.

A transactor is what every orchestrated action receives: it can run
statements, begin (which is how nesting works) and be finalized. Which of the
three variants wraps a handle decides who is allowed to commit:

- ``RootTransactor`` wraps a pool. Nothing is open, so commit and rollback
  do nothing; begin starts a new transaction.
- ``NestableTransactor`` wraps the outermost transaction. Begin hands back
  the same transaction; commit and rollback are real.
- ``NestedTransactor`` wraps a transaction owned by an enclosing scope.
  Begin hands back the same transaction and rollback is real, but commit does
  nothing: only the scope that opened the transaction may persist it.
"""

from enum import Enum
from typing import List, Optional
from sqlalchemy import Row
from txscope.database.base import ExecResult, Finalizable, Openable, Params, Query, Runnable
from txscope.database.sql_driver import Pool, Tx


class TransactorKind(str, Enum):
    ROOT = "root"
    NESTABLE = "nestable"
    NESTED = "nested"


# Kinds that mean the holder is already inside a managed transaction
MANAGED_KINDS = frozenset({TransactorKind.NESTABLE, TransactorKind.NESTED})


class Transactor(Openable, Runnable, Finalizable):
    """Base for the three variants; statements go to the wrapped handle."""

    kind: TransactorKind

    def __init__(self, handle: Runnable):
        self._handle = handle

    @property
    def handle(self) -> Runnable:
        return self._handle

    @property
    def managed(self) -> bool:
        return self.kind in MANAGED_KINDS

    def exec(self, query: Query, params: Params = None) -> ExecResult:
        return self._handle.exec(query, params)

    def query(self, query: Query, params: Params = None) -> List[Row]:
        return self._handle.query(query, params)

    def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        return self._handle.query_one(query, params)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value} handle={self._handle!r}>"


class RootTransactor(Transactor):
    kind = TransactorKind.ROOT

    def __init__(self, pool: Pool):
        super().__init__(pool)

    def begin(self) -> Tx:
        return self._handle.begin()

    def commit(self) -> None:
        return None

    def rollback(self) -> None:
        return None


class NestableTransactor(Transactor):
    kind = TransactorKind.NESTABLE

    def __init__(self, tx: Tx):
        super().__init__(tx)

    @property
    def tx(self) -> Tx:
        return self._handle

    def begin(self) -> Tx:
        return self._handle

    def commit(self) -> None:
        self._handle.commit()

    def rollback(self) -> None:
        self._handle.rollback()


class NestedTransactor(Transactor):
    kind = TransactorKind.NESTED

    def __init__(self, tx: Tx):
        super().__init__(tx)

    @property
    def tx(self) -> Tx:
        return self._handle

    def begin(self) -> Tx:
        return self._handle

    def commit(self) -> None:
        # The enclosing scope owns the transaction
        return None

    def rollback(self) -> None:
        self._handle.rollback()


def is_managed(handle) -> bool:
    """True when handle is a transactor already inside a managed transaction."""
    return isinstance(handle, Transactor) and handle.managed


def wrap_begun(handle, tx: Tx) -> Transactor:
    """Pick the variant for a transaction begun on handle, by the caller's kind."""
    if is_managed(handle):
        return NestedTransactor(tx)
    return NestableTransactor(tx)
