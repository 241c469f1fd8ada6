"""
Capability interfaces shared by pool handles, transaction handles and transactors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from sqlalchemy import Row, text
from sqlalchemy.sql.base import Executable

Query = Union[str, Executable]
Params = Optional[Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]]


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a statement, captured before the cursor is released."""
    rows_affected: int
    last_insert_id: Optional[Any] = None

    @classmethod
    def from_cursor(cls, result) -> "ExecResult":
        last_insert_id = getattr(result, "lastrowid", None)
        return cls(rows_affected=result.rowcount, last_insert_id=last_insert_id)


def to_statement(query: Query) -> Executable:
    """Wrap raw SQL strings with text(); pass SQLAlchemy constructs through."""
    if isinstance(query, str):
        return text(query)
    return query


def to_parameters(params: Params) -> Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]:
    if params is None:
        return None
    if isinstance(params, Mapping):
        return dict(params)
    return [dict(p) for p in params]


class Runnable(ABC):
    """Can execute statements and run queries."""

    @abstractmethod
    def exec(self, query: Query, params: Params = None) -> ExecResult:
        pass

    @abstractmethod
    def query(self, query: Query, params: Params = None) -> List[Row]:
        pass

    @abstractmethod
    def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        pass


class Openable(ABC):
    """Can produce an open transaction, new or already held."""

    @abstractmethod
    def begin(self):
        pass


class Finalizable(ABC):
    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass


class AsyncRunnable(ABC):
    """Asyncio counterpart of Runnable."""

    @abstractmethod
    async def exec(self, query: Query, params: Params = None) -> ExecResult:
        pass

    @abstractmethod
    async def query(self, query: Query, params: Params = None) -> List[Row]:
        pass

    @abstractmethod
    async def query_one(self, query: Query, params: Params = None) -> Optional[Row]:
        pass


class AsyncOpenable(ABC):
    @abstractmethod
    async def begin(self):
        pass


class AsyncFinalizable(ABC):
    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
