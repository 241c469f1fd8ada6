from sqlalchemy import Connection, Engine
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from txscope.database.async_driver import AsyncPool, AsyncTx
from txscope.database.sql_driver import Pool, Tx
from txscope.exceptions import UnsupportedHandleError
from .async_wrappers import AsyncNestableTransactor, AsyncNestedTransactor, AsyncRootTransactor, AsyncTransactor
from .wrappers import NestableTransactor, NestedTransactor, RootTransactor, Transactor, TransactorKind


def new_transactor(handle) -> Transactor:
    """
    Turn a handle supplied from outside into a transactor.

    - Pool (or raw Engine) -> RootTransactor
    - open Tx (or raw Connection inside a transaction) -> NestableTransactor
    - NestedTransactor -> new NestedTransactor over the same Tx

    Anything else raises UnsupportedHandleError: handing it over is a defect
    in the calling code. A NestableTransactor is refused as well, since
    re-wrapping it would give a second scope the right to commit.
    """
    if isinstance(handle, Transactor):
        if handle.kind is TransactorKind.NESTED:
            return NestedTransactor(handle.tx)
        raise UnsupportedHandleError(handle)
    if isinstance(handle, Pool):
        return RootTransactor(handle)
    if isinstance(handle, Engine):
        return RootTransactor(Pool(handle))
    if isinstance(handle, Tx):
        return NestableTransactor(handle)
    if isinstance(handle, Connection) and handle.in_transaction():
        return NestableTransactor(Tx.adopt(handle))
    raise UnsupportedHandleError(handle)


def new_async_transactor(handle) -> AsyncTransactor:
    """Asyncio counterpart of new_transactor()."""
    if isinstance(handle, AsyncTransactor):
        if handle.kind is TransactorKind.NESTED:
            return AsyncNestedTransactor(handle.tx)
        raise UnsupportedHandleError(handle)
    if isinstance(handle, AsyncPool):
        return AsyncRootTransactor(handle)
    if isinstance(handle, AsyncEngine):
        return AsyncRootTransactor(AsyncPool(handle))
    if isinstance(handle, AsyncTx):
        return AsyncNestableTransactor(handle)
    if isinstance(handle, AsyncConnection) and handle.in_transaction():
        return AsyncNestableTransactor(AsyncTx.adopt(handle))
    raise UnsupportedHandleError(handle)
