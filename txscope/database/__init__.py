"""
Database handles: capability interfaces and their SQLAlchemy adapters.
"""

from .async_driver import AsyncPool, AsyncTx
from .base import ExecResult, Finalizable, Openable, Runnable
from .manager import DatabaseManager
from .sql_driver import Pool, Tx

__all__ = [
    "Runnable",
    "Openable",
    "Finalizable",
    "ExecResult",
    "Pool",
    "Tx",
    "AsyncPool",
    "AsyncTx",
    "DatabaseManager",
]
