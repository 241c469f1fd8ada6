"""
Transaction orchestration: transactor variants, the handle factory and run().
"""

from .async_orchestrator import arun
from .async_wrappers import (
    AsyncNestableTransactor,
    AsyncNestedTransactor,
    AsyncRootTransactor,
    AsyncTransactor,
)
from .factory import new_async_transactor, new_transactor
from .orchestrator import run
from .wrappers import (
    NestableTransactor,
    NestedTransactor,
    RootTransactor,
    Transactor,
    TransactorKind,
)

__all__ = [
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
]
