"""
txscope: run database work in a transaction, whether or not one is already open.

Hand run() a Pool and it begins and commits a transaction; hand it the
transactor an enclosing action received and it joins that transaction instead,
leaving the commit to the scope that opened it.
"""

__version__ = "1.0.0"

from .config import Settings, settings
from .database import AsyncPool, AsyncTx, DatabaseManager, ExecResult, Pool, Tx
from .exceptions import TransactionClosedError, TransactionError, UnsupportedHandleError
from .logging.logger import LogConfig, get_logger
from .repository import AsyncBaseRepository, AsyncUnitOfWork, BaseRepository, UnitOfWork
from .transaction import (
    AsyncNestableTransactor,
    AsyncNestedTransactor,
    AsyncRootTransactor,
    AsyncTransactor,
    NestableTransactor,
    NestedTransactor,
    RootTransactor,
    Transactor,
    TransactorKind,
    arun,
    new_async_transactor,
    new_transactor,
    run,
)

__all__ = [
    "__version__",
    # Orchestration
    "run",
    "arun",
    "new_transactor",
    "new_async_transactor",
    "TransactorKind",
    "Transactor",
    "RootTransactor",
    "NestableTransactor",
    "NestedTransactor",
    "AsyncTransactor",
    "AsyncRootTransactor",
    "AsyncNestableTransactor",
    "AsyncNestedTransactor",
    # Handles
    "Pool",
    "Tx",
    "AsyncPool",
    "AsyncTx",
    "ExecResult",
    "DatabaseManager",
    # Unit of work / repositories
    "UnitOfWork",
    "AsyncUnitOfWork",
    "BaseRepository",
    "AsyncBaseRepository",
    # Errors
    "TransactionError",
    "TransactionClosedError",
    "UnsupportedHandleError",
    # Ambient
    "Settings",
    "settings",
    "LogConfig",
    "get_logger",
]
